"""articleparser.parser: high-level ArticleParser class.

Bundles fetch configuration (timeout, user agent, custom fetcher, date
leniency) into a single reusable object.

Usage::

    from articleparser import ArticleParser

    parser = ArticleParser(timeout=10)
    url = parser.validate_url("example.com/blog/post")
    article = parser.fetch_content(url)

    # Parse pre-fetched HTML (no network)
    meta = parser.parse_metadata(html, url="https://example.com/blog/post")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from articleparser import settings
from articleparser.query import (
    extract_content_from_html,
    extract_metadata_from_html,
    fetch_html,
    validate_url,
)
from articleparser.query import fetch_content as _fetch_content
from articleparser.query import fetch_metadata as _fetch_metadata

if TYPE_CHECKING:
    from articleparser.items import ArticleContent, ArticleMetadata
    from articleparser.query import Fetcher


class ArticleParser:
    """Reusable extraction entry point.

    All parameters are optional; ``ArticleParser()`` behaves exactly like
    calling :func:`articleparser.fetch_content` / :func:`fetch_metadata`
    directly.

    Args:
        timeout:       Per-request network timeout in seconds.
        user_agent:    User-Agent for the default fetcher.
        fetcher:       Custom ``fetcher(url, timeout) -> str | bytes``; when
                       set, *user_agent* is ignored.
        lenient_dates: Allow the dateparser fallback for published dates.
    """

    def __init__(
        self,
        timeout: float = settings.DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        fetcher: Fetcher | None = None,
        lenient_dates: bool = False,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._fetcher = fetcher
        self._lenient_dates = lenient_dates

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fetch(self, url: str, timeout: float | None) -> str:
        return fetch_html(url, timeout=timeout, user_agent=self._user_agent)

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------

    def validate_url(self, raw: str) -> str:
        """Normalize user-entered text into an http(s) URL."""
        return validate_url(raw)

    def fetch_metadata(self, url: str) -> ArticleMetadata:
        """Fetch *url* and return link-preview metadata."""
        return _fetch_metadata(
            url,
            timeout=self._timeout,
            fetcher=self._fetcher or self._fetch,
            lenient_dates=self._lenient_dates,
        )

    def fetch_content(self, url: str) -> ArticleContent:
        """Fetch *url* and return metadata plus the Markdown body."""
        return _fetch_content(
            url,
            timeout=self._timeout,
            fetcher=self._fetcher or self._fetch,
            lenient_dates=self._lenient_dates,
        )

    def parse_metadata(self, html: str | bytes, url: str) -> ArticleMetadata:
        """Extract metadata from pre-fetched HTML without network calls."""
        return extract_metadata_from_html(html, url, lenient_dates=self._lenient_dates)

    def parse_content(self, html: str | bytes, url: str) -> ArticleContent:
        """Extract metadata and Markdown body from pre-fetched HTML."""
        return extract_content_from_html(html, url, lenient_dates=self._lenient_dates)
