"""Convert the located content container to Markdown.

Pipeline:
1. Select ``p, h1-h6, blockquote, ul, ol, img`` descendants in document order.
2. Drop any candidate nested inside an already-accepted one, so a list and
   its items (or a quote and its paragraphs) are emitted once.
3. Convert each element's inner HTML with an ordered list of regex rules.
4. Keep blocks above a per-kind length floor.
5. Add block-level prefixes (``#``, ``>``, ``-``) and join with blank lines.

The inline rules are regex based and not nesting-aware: markup such as
``<b><b>x</b> y</b>`` converts imperfectly.  Real article markup is shallow
enough that this holds up.
"""

from __future__ import annotations

import logging
import re

from bs4 import Tag

from articleparser import settings
from articleparser.extractors import dom
from articleparser.extractors.main_content import is_icon_like, is_rejected_image
from articleparser.extractors.urlnorm import resolve_image_url

logger = logging.getLogger(__name__)

CANDIDATE_SELECTOR = "p, h1, h2, h3, h4, h5, h6, blockquote, ul, ol, img"

_HEADING_PREFIXES: dict[str, str] = {
    "h1": "# ",
    "h2": "## ",
    "h3": "### ",
    "h4": "#### ",
    "h5": "##### ",
    "h6": "###### ",
}

_SHORT_FLOOR_TAGS: frozenset[str] = frozenset({*_HEADING_PREFIXES, "img"})

_INLINE_IMG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)

# Attributes read from an inline <img>, in any order.  Values containing a
# double quote are serialized in single quotes.
_IMG_ATTR_RE = re.compile(
    r"(?<![\w-])(src|alt|width|height)=(?:\"([^\"]*)\"|'([^']*)')",
    re.IGNORECASE,
)

# Ordered rewrite rules applied after inline-image substitution.  Order
# matters: list and emphasis markers must be produced before the catch-all
# tag strip removes everything else.
_INLINE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"<li\b[^>]*>", re.IGNORECASE), "\n- "),
    (re.compile(r"</li>", re.IGNORECASE), ""),
    (re.compile(r"</?(?:ul|ol)\b[^>]*>", re.IGNORECASE), "\n"),
    (re.compile(r"<strong>(.*?)</strong>"), r"**\1**"),
    (re.compile(r"<b>(.*?)</b>"), r"**\1**"),
    (re.compile(r"<em>(.*?)</em>"), r"*\1*"),
    (re.compile(r"<i>(.*?)</i>"), r"*\1*"),
    (re.compile(r"<code>(.*?)</code>"), r"`\1`"),
    (re.compile(r"<a\s[^>]*?(?<![\w-])href=\"([^\"]*)\"[^>]*>(.*?)</a>"), r"[\2](\1)"),
    (re.compile(r"<br\s*/?>"), " "),
    (re.compile(r"<[^>]+>"), ""),
)

# &amp; goes last so "&amp;lt;" stays a literal "&lt;"
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
    ("\xa0", " "),  # the serializer has already decoded &nbsp;
    ("&amp;", "&"),
)

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")


# ---------------------------------------------------------------------------
# Element selection
# ---------------------------------------------------------------------------

def remove_descendant_duplicates(elements: list[Tag]) -> list[Tag]:
    """Keep elements in order, skipping any nested inside an accepted one."""
    accepted: list[Tag] = []
    accepted_ids: set[int] = set()
    for el in elements:
        if any(id(parent) in accepted_ids for parent in el.parents):
            continue
        accepted.append(el)
        accepted_ids.add(id(el))
    return accepted


def select_content_elements(container: Tag) -> list[Tag]:
    return remove_descendant_duplicates(container.select(CANDIDATE_SELECTOR))


# ---------------------------------------------------------------------------
# Inline conversion
# ---------------------------------------------------------------------------

def _image_markdown(src: str, alt: str, base_url: str, title: str = "") -> str:
    resolved = resolve_image_url(src, base_url)
    if resolved is None:
        return ""
    if title:
        return f'![{alt}]({resolved} "{title}")'
    return f"![{alt}]({resolved})"


def _replace_inline_images(html: str, base_url: str) -> str:
    def _sub(match: re.Match[str]) -> str:
        tag = match.group(0)
        attrs: dict[str, str] = {}
        for name, double_quoted, single_quoted in _IMG_ATTR_RE.findall(tag):
            attrs.setdefault(name.lower(), double_quoted or single_quoted)
        if "src" not in attrs:
            return tag

        src = attrs["src"]
        if is_icon_like(src, attrs.get("width", ""), attrs.get("height", "")):
            return ""
        return _image_markdown(src, attrs.get("alt", ""), base_url) or tag

    return _INLINE_IMG_RE.sub(_sub, html)


def _unescape(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def html_fragment_to_markdown(html: str, base_url: str) -> str:
    """Run the inline rewrite pipeline over an HTML fragment."""
    md = _replace_inline_images(html, base_url)
    for pattern, replacement in _INLINE_RULES:
        md = pattern.sub(replacement, md)
    md = _unescape(md)
    md = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", md)
    return md.strip()


def element_to_markdown(el: Tag, base_url: str) -> str:
    """Convert a single content element to inline Markdown (no block prefix)."""
    if dom.tag_name(el) == "img":
        src = dom.attr(el, "src").strip()
        if not src or is_rejected_image(el):
            return ""
        return _image_markdown(
            src,
            dom.attr(el, "alt"),
            base_url,
            title=dom.attr(el, "title"),
        )
    return html_fragment_to_markdown(dom.inner_html(el), base_url)


# ---------------------------------------------------------------------------
# Block formatting
# ---------------------------------------------------------------------------

def _format_list(el: Tag, base_url: str) -> str:
    items: list[str] = []
    for li in el.find_all("li", recursive=False):
        md = element_to_markdown(li, base_url)
        if md:
            items.append(f"- {md}")
    return "\n".join(items)


def format_block(el: Tag, markdown: str, base_url: str) -> str:
    """Apply the block-level prefix for *el*'s kind to its converted text."""
    name = dom.tag_name(el)
    if name in _HEADING_PREFIXES:
        return _HEADING_PREFIXES[name] + markdown
    if name == "blockquote":
        return f"> {markdown}"
    if name in ("ul", "ol"):
        return _format_list(el, base_url)
    return markdown


def _min_length(el: Tag) -> int:
    if dom.tag_name(el) in _SHORT_FLOOR_TAGS:
        return settings.MIN_HEADING_LENGTH
    return settings.MIN_BLOCK_LENGTH


def container_to_markdown(container: Tag, base_url: str) -> str:
    """Render *container*'s readable elements as a Markdown document."""
    blocks: list[str] = []
    for el in select_content_elements(container):
        md = element_to_markdown(el, base_url)
        if len(md) <= _min_length(el):
            continue
        formatted = format_block(el, md, base_url)
        if formatted:
            blocks.append(formatted)

    markdown = "\n\n".join(blocks)
    logger.debug("Markdown conversion kept %d blocks (%d chars)", len(blocks), len(markdown))
    return markdown
