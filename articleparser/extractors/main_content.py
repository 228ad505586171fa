"""Main content location: noise stripping, container selection, lead image.

Container selection walks a fixed priority list of CSS selectors and takes
the first match carrying enough text.  The same list, restricted to ``img``
descendants, supplies a fallback thumbnail when the page has no
``og:image``.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from articleparser import settings
from articleparser.errors import NoMetadataError
from articleparser.extractors import dom

logger = logging.getLogger(__name__)

# Priority CSS selectors (tried in order)
CONTENT_SELECTORS: tuple[str, ...] = (
    "article",
    "main",
    "[role=main]",
    ".post-content",
    ".article-content",
    ".entry-content",
    ".content",
    "body",
)

# Subtrees removed before content extraction
NOISE_SELECTOR = (
    "script, style, nav, header, footer, aside, iframe, "
    ".ad, .advertisement, .social-share"
)

# Substrings in an image src that mark icons, trackers and chrome
_ICON_KEYWORDS: tuple[str, ...] = (
    "icon",
    "logo",
    "avatar",
    "pixel",
    "tracking",
    "badge",
    "button",
)


# ---------------------------------------------------------------------------
# Noise removal
# ---------------------------------------------------------------------------

def strip_noise(soup: BeautifulSoup) -> int:
    """Remove navigation, chrome and ad subtrees from *soup* in place.

    Returns the number of subtrees removed.
    """
    removed = 0
    for el in soup.select(NOISE_SELECTOR):
        # Nested matches die with their ancestor
        if el.decomposed:
            continue
        el.decompose()
        removed += 1
    logger.debug("Stripped %d noise subtrees", removed)
    return removed


# ---------------------------------------------------------------------------
# Container selection
# ---------------------------------------------------------------------------

def _is_valid_container(el: Tag) -> bool:
    return len(dom.text(el)) > settings.MIN_CONTAINER_TEXT_LENGTH


def find_main_content(soup: BeautifulSoup) -> Tag:
    """Return the element most likely to hold the article body.

    The first selector whose first match has more than
    ``MIN_CONTAINER_TEXT_LENGTH`` characters of text wins; otherwise
    ``<body>`` is used as-is.

    Raises:
        NoMetadataError: if the document has no ``<body>``.
    """
    for selector in CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None and _is_valid_container(container):
            logger.debug("Main content container matched %r", selector)
            return container

    body = soup.find("body")
    if isinstance(body, Tag):
        logger.debug("No container met the length floor; using <body>")
        return body
    raise NoMetadataError("Document has no <body> to extract content from")


# ---------------------------------------------------------------------------
# Image heuristics
# ---------------------------------------------------------------------------

def _below_min_dimension(value: str) -> bool:
    try:
        return int(value.strip()) < settings.MIN_IMAGE_DIMENSION
    except ValueError:
        return False


def is_icon_like(src: str, width: str = "", height: str = "") -> bool:
    """Return True for images that are too small or look like site chrome."""
    if width and _below_min_dimension(width):
        return True
    if height and _below_min_dimension(height):
        return True
    src_lower = src.lower()
    return any(kw in src_lower for kw in _ICON_KEYWORDS)


def is_rejected_image(img: Tag) -> bool:
    return is_icon_like(
        dom.attr(img, "src"),
        dom.attr(img, "width"),
        dom.attr(img, "height"),
    )


def _image_source(img: Tag) -> str | None:
    src = dom.attr(img, "src").strip() or dom.attr(img, "data-src").strip()
    if not src or is_rejected_image(img):
        return None
    return src


def first_content_image(soup: BeautifulSoup) -> str | None:
    """Return the raw ``src`` of the first plausible article image.

    Images are searched container by container in ``CONTENT_SELECTORS``
    order.  The returned reference is unresolved; callers pass it through
    :func:`~articleparser.extractors.urlnorm.resolve_image_url`.
    """
    for selector in CONTENT_SELECTORS:
        for img in soup.select(f"{selector} img"):
            src = _image_source(img)
            if src:
                return src
    return None
