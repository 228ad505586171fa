"""Plain-text fallback for containers the Markdown converter cannot handle.

Pages that put prose directly in ``<div>``s, or split it into many tiny
``<p>`` fragments, produce almost nothing in the Markdown path.  This tier
flattens the whole container to text, keeping ``<br>`` line breaks as
paragraph hints, and filters out boilerplate paragraphs.
"""

from __future__ import annotations

import logging
import re

from bs4 import Tag

from articleparser import settings
from articleparser.extractors import dom

logger = logging.getLogger(__name__)

_BREAK_SENTINEL = "|||BREAK|||"
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)

# Paragraphs containing any of these (case-insensitive) are site chrome
BOILERPLATE_KEYWORDS: tuple[str, ...] = (
    "cookie",
    "privacy policy",
    "terms of service",
    "subscribe",
    "newsletter",
    "share this",
    "follow us",
    "copyright ©",
    "all rights reserved",
)


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def split_paragraphs(text: str) -> list[str]:
    """Split *text* on blank lines; each paragraph's whitespace is collapsed."""
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            current.append(stripped)
        elif current:
            paragraphs.append(_normalize_whitespace(" ".join(current)))
            current = []
    if current:
        paragraphs.append(_normalize_whitespace(" ".join(current)))
    return paragraphs


def is_boilerplate(paragraph: str) -> bool:
    lower = paragraph.lower()
    return any(kw in lower for kw in BOILERPLATE_KEYWORDS)


def filter_paragraphs(paragraphs: list[str]) -> list[str]:
    return [
        p for p in (para.strip() for para in paragraphs)
        if len(p) > settings.MIN_PARAGRAPH_LENGTH and not is_boilerplate(p)
    ]


def container_to_text(container: Tag) -> str:
    """Flatten *container* to filtered plain-text paragraphs joined by blank lines."""
    html = _BR_RE.sub(_BREAK_SENTINEL, dom.inner_html(container))
    if not html.strip():
        return ""
    body = dom.parse_html(html).body
    if body is None:
        logger.debug("Plain-text fallback: re-parsed fragment has no body")
        return ""

    text = dom.text(body).replace(_BREAK_SENTINEL, "\n")
    paragraphs = filter_paragraphs(split_paragraphs(text))
    result = "\n\n".join(paragraphs)
    logger.debug(
        "Plain-text fallback kept %d paragraphs (%d chars)", len(paragraphs), len(result),
    )
    return result
