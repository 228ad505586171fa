"""Deterministic metadata extraction from a parsed page.

Priority chain (highest → lowest):
    title:       og:title → <title> → URL host
    description: og:description → <meta name="description">
    image:       og:image → first plausible image in the content containers
    date:        fixed list of published-time selectors (see _DATE_SOURCES)
    author:      <meta name="author"> → article:author → twitter:creator
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from bs4 import BeautifulSoup

from articleparser.extractors import dom
from articleparser.extractors.dates import parse_date
from articleparser.extractors.main_content import first_content_image
from articleparser.extractors.urlnorm import extract_domain, resolve_image_url

logger = logging.getLogger(__name__)

# (selector, attribute) pairs scanned in order for the publication date
_DATE_SOURCES: tuple[tuple[str, str], ...] = (
    ("meta[property='article:published_time']", "content"),
    ("meta[name='article:published_time']", "content"),
    ("meta[property='og:published_time']", "content"),
    ("meta[name='published_time']", "content"),
    ("meta[name='datePublished']", "content"),
    ("meta[itemprop='datePublished']", "content"),
    ("time[datetime]", "datetime"),
    ("meta[property='article:published']", "content"),
)

_AUTHOR_SELECTORS: tuple[str, ...] = (
    "meta[name='author']",
    "meta[property='article:author']",
    "meta[name='twitter:creator']",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _first(*values: Any) -> Any:
    """Return the first non-empty, non-None value."""
    for v in values:
        if v:
            return v
    return None


def _meta_content(soup: BeautifulSoup, selector: str, attribute: str = "content") -> str | None:
    el = soup.select_one(selector)
    if el is None:
        return None
    return dom.attr(el, attribute).strip() or None


# ---------------------------------------------------------------------------
# Open Graph / standard tags
# ---------------------------------------------------------------------------

def _extract_og(soup: BeautifulSoup) -> dict[str, str | None]:
    return {
        "og:title": _meta_content(soup, "meta[property='og:title']"),
        "og:image": _meta_content(soup, "meta[property='og:image']"),
        "og:description": _meta_content(soup, "meta[property='og:description']"),
    }


def _extract_html_title(soup: BeautifulSoup) -> str | None:
    title_tag = soup.select_one("title")
    if title_tag is None:
        return None
    return " ".join(title_tag.get_text().split()) or None


# ---------------------------------------------------------------------------
# Published date / author
# ---------------------------------------------------------------------------

def extract_published_date(
    soup: BeautifulSoup,
    *,
    lenient: bool | None = None,
) -> datetime | None:
    """Return the first publication date that parses, scanning _DATE_SOURCES in order."""
    for selector, attribute in _DATE_SOURCES:
        raw = _meta_content(soup, selector, attribute)
        if not raw:
            continue
        parsed = parse_date(raw, lenient=lenient)
        if parsed is not None:
            logger.debug("Published date from %s: %s", selector, parsed.isoformat())
            return parsed
    return None


def extract_author(soup: BeautifulSoup) -> str | None:
    for selector in _AUTHOR_SELECTORS:
        value = _meta_content(soup, selector)
        # Profile links (article:author is often a URL) are not names
        if value and not value.lower().startswith(("http://", "https://")):
            return value
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_metadata(
    soup: BeautifulSoup,
    page_url: str,
    *,
    lenient_dates: bool | None = None,
) -> dict:
    """Extract article metadata from a parsed page.

    Args:
        soup:          Parsed document.
        page_url:      Page URL, used for the title fallback and to resolve
                       relative image references.
        lenient_dates: Forwarded to :func:`~articleparser.extractors.dates.parse_date`.

    Returns a dict with keys:
        title, description, image, published_date, author
    ``title`` is never empty; every other value may be None.
    """
    og = _extract_og(soup)

    title = _first(
        og["og:title"],
        _extract_html_title(soup),
        extract_domain(page_url),
        page_url,
    )

    description = _first(
        og["og:description"],
        _meta_content(soup, "meta[name='description']"),
    )

    image_ref = _first(og["og:image"], first_content_image(soup))
    image = resolve_image_url(image_ref, page_url) if image_ref else None
    if image_ref and image is None:
        logger.debug("Dropping unresolvable image reference %r", image_ref)

    return {
        "title": title,
        "description": description,
        "image": image,
        "published_date": extract_published_date(soup, lenient=lenient_dates),
        "author": extract_author(soup),
    }
