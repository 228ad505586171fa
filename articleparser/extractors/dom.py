"""Narrow DOM access layer over BeautifulSoup.

The heuristics in this sub-package only ever need to parse a document, select
elements, and read text, inner HTML, attributes and tag names.  All
of that goes through the helpers here so the rest of the code never depends on
parser internals beyond :class:`bs4.Tag`.
"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from articleparser.errors import ParsingError

logger = logging.getLogger(__name__)

# Elements whose boundaries separate words when flattening to text
_BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "br", "dd",
        "details", "dialog", "div", "dl", "dt", "fieldset", "figcaption",
        "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "html", "li", "main", "nav", "ol", "p", "pre",
        "section", "summary", "table", "tbody", "td", "tfoot", "th",
        "thead", "tr", "ul",
    },
)

# Elements whose text is never reader-visible
_INVISIBLE_TAGS: frozenset[str] = frozenset(
    {"script", "style", "noscript", "template", "head", "title"},
)

_BLOCK_END = object()


def parse_html(html: str | bytes) -> BeautifulSoup:
    """Parse *html* with the lxml tree builder.

    Raises:
        ParsingError: if the parser cannot build a document at all.
    """
    try:
        return BeautifulSoup(html, "lxml")
    except Exception as exc:
        logger.debug("HTML parse failed: %s", exc)
        raise ParsingError(f"Could not parse HTML: {exc}", cause=exc) from exc


def attr(el: Tag, name: str, default: str = "") -> str:
    """Safely read attribute *name* (str | list | None) as a string."""
    val: Any = el.get(name)
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def tag_name(el: Tag) -> str:
    return (el.name or "").lower()


def inner_html(el: Tag) -> str:
    """Serialized children of *el*, without the element's own tags."""
    return el.decode_contents()


def text(el: Tag) -> str:
    """Reader-visible text of *el* with whitespace collapsed to single spaces.

    Block-level boundaries count as whitespace, so ``<p>a</p><p>b</p>``
    flattens to ``"a b"`` rather than ``"ab"``.
    """
    parts: list[str] = []
    stack: list[Any] = [el]
    while stack:
        node = stack.pop()
        if node is _BLOCK_END:
            parts.append(" ")
        elif isinstance(node, Tag):
            name = tag_name(node)
            if name in _INVISIBLE_TAGS and node is not el:
                continue
            if name in _BLOCK_TAGS:
                parts.append(" ")
                stack.append(_BLOCK_END)
            stack.extend(reversed(node.contents))
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            parts.append(str(node))
    return " ".join("".join(parts).split())
