"""Project settings for articleparser.

Plain module-level constants.  Network, batch and date settings can be
overridden through ``ARTICLEPARSER_*`` environment variables, read once at
import time.
"""

from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------
DEFAULT_TIMEOUT = _env_float("ARTICLEPARSER_TIMEOUT", 30.0)

DEFAULT_USER_AGENT = os.getenv(
    "ARTICLEPARSER_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36",
)

# Transport retries performed by the default fetcher.  The engine itself
# never retries; 0 keeps a single attempt per extraction.
MAX_RETRIES = _env_int("ARTICLEPARSER_MAX_RETRIES", 0)

# ---------------------------------------------------------------------------
# Extraction thresholds
# ---------------------------------------------------------------------------
# Content must be strictly longer than this to count as a successful extraction
MIN_CONTENT_LENGTH = 200

# A candidate container's text must be strictly longer than this
MIN_CONTAINER_TEXT_LENGTH = 100

# Converted text floors (strictly greater than) per element kind
MIN_BLOCK_LENGTH = 20
MIN_HEADING_LENGTH = 3

# Plain-text fallback drops paragraphs at or below this length
MIN_PARAGRAPH_LENGTH = 30

# Images with a numeric width/height below this are treated as icons
MIN_IMAGE_DIMENSION = 200

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------
# When true, dates the fixed format chain rejects get one more try via dateparser
LENIENT_DATES = os.getenv("ARTICLEPARSER_LENIENT_DATES", "0") == "1"

# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------
MAX_WORKERS = _env_int("ARTICLEPARSER_MAX_WORKERS", 8)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("ARTICLEPARSER_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
