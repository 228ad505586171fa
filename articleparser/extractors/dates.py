"""Publication-date parsing.

Raw strings go through a fixed chain of formats; the first one that parses
wins.  Results are always timezone-aware (naive values are taken as UTC).
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime

import dateparser

from articleparser import settings

logger = logging.getLogger(__name__)

# ISO-8601 forms, strictest first
_ISO_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S.%f%z",   # internet date-time with fractional seconds
    "%Y-%m-%dT%H:%M:%S%z",      # internet date-time
    "%Y-%m-%d",                 # full date
)

# Locale-invariant patterns tried after the ISO forms
_PATTERN_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S%z",      # yyyy-MM-dd'T'HH:mm:ssZ
    "%Y-%m-%dT%H:%M:%S.%f%z",   # yyyy-MM-dd'T'HH:mm:ss.SSSZ
    "%Y-%m-%d %H:%M:%S",        # yyyy-MM-dd HH:mm:ss
    "%Y-%m-%d",                 # yyyy-MM-dd
    "%b %d, %Y",                # MMM dd, yyyy
    "%B %d, %Y",                # MMMM dd, yyyy
)

DATE_FORMATS: tuple[str, ...] = _ISO_FORMATS + _PATTERN_FORMATS

# strptime's %f accepts at most six digits
_LONG_FRACTION_RE = re.compile(r"(\.\d{6})\d+")

_LENIENT_MIN_YEAR = 1990
_LENIENT_MAX_YEAR = 2099


def _try_format(raw: str, fmt: str) -> datetime | None:
    try:
        parsed = datetime.strptime(raw, fmt)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_lenient(raw: str) -> datetime | None:
    """Last-chance parse via dateparser.

    Returns None on failure or when the year falls outside 1990-2099
    (catches epoch defaults like 1970-01-01 and far-future typos).
    """
    try:
        parsed = dateparser.parse(
            raw,
            settings={
                "RETURN_AS_TIMEZONE_AWARE": True,
                "PREFER_DAY_OF_MONTH": "first",
                "PREFER_LOCALE_DATE_ORDER": False,
            },
        )
    except Exception as exc:
        logger.debug("Lenient date parse failed for %r: %s", raw, exc)
        return None
    if parsed is None or not (_LENIENT_MIN_YEAR <= parsed.year <= _LENIENT_MAX_YEAR):
        return None
    return parsed


def parse_date(raw: str | None, *, lenient: bool | None = None) -> datetime | None:
    """Parse *raw* into an aware datetime, or None when no format matches.

    Args:
        raw:     Date string as found in the page.
        lenient: Fall back to dateparser after the fixed chain.  Defaults to
                 ``settings.LENIENT_DATES``.
    """
    if not raw:
        return None
    candidate = _LONG_FRACTION_RE.sub(r"\1", raw.strip())
    if not candidate:
        return None

    for fmt in DATE_FORMATS:
        parsed = _try_format(candidate, fmt)
        if parsed is not None:
            return parsed

    if settings.LENIENT_DATES if lenient is None else lenient:
        return _parse_lenient(candidate)

    logger.debug("No date format matched %r", raw)
    return None
