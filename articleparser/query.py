"""articleparser.query - single-URL fetch and extraction API.

Basic usage::

    from articleparser.query import fetch_content, validate_url

    url = validate_url("example.com/blog/some-post")
    article = fetch_content(url)
    print(article.title)
    print(article.published_date)
    print(article.content)

Link previews only (no body conversion)::

    from articleparser.query import fetch_metadata

    meta = fetch_metadata("https://example.com/blog/some-post")
    print(meta.title, meta.thumbnail_url)

Already have the HTML::

    from articleparser.query import extract_content_from_html

    article = extract_content_from_html(html, "https://example.com/blog/post")

Every failure is raised as a subclass of
:class:`~articleparser.errors.ArticleExtractionError`.
"""

from __future__ import annotations

import gzip
import logging
import random
import time
import urllib.error
import urllib.request
import zlib
from collections.abc import Callable

from bs4 import BeautifulSoup

from articleparser import settings
from articleparser.errors import (
    ArticleExtractionError,
    InvalidURLError,
    NetworkError,
    NoMetadataError,
)
from articleparser.extractors.dom import parse_html
from articleparser.extractors.main_content import find_main_content, strip_noise
from articleparser.extractors.markdown import container_to_markdown
from articleparser.extractors.metadata import extract_metadata
from articleparser.extractors.plaintext import container_to_text
from articleparser.extractors.urlnorm import has_http_scheme, normalize_url
from articleparser.items import ArticleContent, ArticleMetadata

logger = logging.getLogger(__name__)

# fetcher(url, timeout) -> page body
Fetcher = Callable[[str, float | None], str | bytes]


# ---------------------------------------------------------------------------
# URL validation
# ---------------------------------------------------------------------------

def validate_url(raw: str) -> str:
    """Normalize user-entered *raw* text into an http(s) URL.

    Raises:
        InvalidURLError: if no usable http(s) URL can be built.
    """
    return normalize_url(raw)


def _require_http(url: str) -> None:
    if not has_http_scheme(url):
        raise InvalidURLError(f"Unsupported URL scheme: {url!r}", url=url)


# ---------------------------------------------------------------------------
# Low-level HTTP fetch
# ---------------------------------------------------------------------------

_RETRY_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    if encoding == "gzip":
        raw = gzip.decompress(raw)
    elif encoding in ("deflate", "zlib"):
        raw = zlib.decompress(raw)
    elif encoding == "br":
        raise NetworkError(f"Unsupported Brotli-encoded response from {url}", url=url)

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def fetch_html(
    url: str,
    *,
    timeout: float | None = None,
    user_agent: str | None = None,
    max_retries: int | None = None,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    The engine never retries on its own; *max_retries* (default
    ``settings.MAX_RETRIES``, i.e. 0) lets a caller opt into jittered
    exponential backoff on 429/5xx and network-level failures.

    Args:
        url:         Fully-qualified HTTP/HTTPS URL.
        timeout:     Request timeout in seconds (default ``settings.DEFAULT_TIMEOUT``).
        user_agent:  Override the default browser User-Agent string.
        max_retries: Maximum number of retry attempts.

    Returns:
        Response body decoded to ``str``.

    Raises:
        InvalidURLError: for non-http(s) URLs.
        NetworkError:    on HTTP errors, timeouts, or connection failures.
    """
    _require_http(url)

    timeout = settings.DEFAULT_TIMEOUT if timeout is None else timeout
    retries = settings.MAX_RETRIES if max_retries is None else max_retries

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or settings.DEFAULT_USER_AGENT,
            "Accept": (
                "text/html,application/xhtml+xml,application/xml;"
                "q=0.9,image/avif,image/webp,*/*;q=0.8"
            ),
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    last_exc: NetworkError | None = None
    for attempt in range(retries + 1):
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                raw: bytes = resp.read()
                try:
                    return _decode_response_body(raw, resp.headers, url)
                except (OSError, zlib.error) as exc:
                    raise NetworkError(
                        f"Decompression failed for {url}: {exc}", url=url, cause=exc,
                    ) from exc

        except urllib.error.HTTPError as exc:
            error = NetworkError(
                f"HTTP {exc.code} fetching {url}: {exc.reason}",
                url=url,
                cause=exc,
                status=exc.code,
            )
            if exc.code in _RETRY_CODES and attempt < retries:
                delay = (2 ** attempt) + random.uniform(0, 1)
                logger.debug(
                    "HTTP %d for %s, retrying in %.1fs (attempt %d/%d)",
                    exc.code, url, delay, attempt + 1, retries,
                )
                time.sleep(delay)
                last_exc = error
                continue
            raise error from exc

        except NetworkError:
            raise

        except (urllib.error.URLError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            error = NetworkError(f"Network error fetching {url}: {reason}", url=url, cause=exc)
            if attempt < retries:
                delay = (2 ** attempt) + random.uniform(0, 1)
                logger.debug(
                    "Network error for %s, retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, retries, reason,
                )
                time.sleep(delay)
                last_exc = error
                continue
            raise error from exc

    raise last_exc or NetworkError(f"All retries exhausted for {url}", url=url)


def _default_fetcher(url: str, timeout: float | None) -> str:
    return fetch_html(url, timeout=timeout)


def _download(url: str, timeout: float | None, fetcher: Fetcher | None) -> str:
    fetch = fetcher or _default_fetcher
    try:
        body = fetch(url, timeout)
    except ArticleExtractionError:
        raise
    except Exception as exc:
        raise NetworkError(f"Failed to fetch {url}: {exc}", url=url, cause=exc) from exc
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body


# ---------------------------------------------------------------------------
# Extraction (pure HTML → models, no network)
# ---------------------------------------------------------------------------

def _extract_body(soup: BeautifulSoup, url: str) -> str:
    """Locate the article container and render it, falling back to plain text."""
    container = find_main_content(soup)

    markdown = container_to_markdown(container, url)
    if len(markdown) > settings.MIN_CONTENT_LENGTH:
        return markdown

    logger.debug(
        "Markdown too short (%d chars) for %s, trying plain-text fallback",
        len(markdown), url,
    )
    text = container_to_text(container)
    if len(text) > settings.MIN_CONTENT_LENGTH:
        return text

    raise NoMetadataError(
        f"No readable content found for {url} "
        f"(markdown={len(markdown)} chars, plain text={len(text)} chars)",
        url=url,
    )


def extract_metadata_from_html(
    html: str | bytes,
    url: str,
    *,
    lenient_dates: bool | None = None,
) -> ArticleMetadata:
    """Build :class:`ArticleMetadata` from already-fetched *html*.

    Raises:
        InvalidURLError: if *url* is not http(s).
        ParsingError:    if the HTML cannot be parsed.
    """
    _require_http(url)
    soup = parse_html(html)
    meta = extract_metadata(soup, url, lenient_dates=lenient_dates)
    return ArticleMetadata(
        title=meta["title"],
        thumbnail_url=meta["image"],
        description=meta["description"],
        published_date=meta["published_date"],
        author=meta["author"],
    )


def extract_content_from_html(
    html: str | bytes,
    url: str,
    *,
    lenient_dates: bool | None = None,
) -> ArticleContent:
    """Build :class:`ArticleContent` from already-fetched *html*.

    Noise subtrees are stripped before both metadata and body extraction.

    Raises:
        InvalidURLError: if *url* is not http(s).
        ParsingError:    if the HTML cannot be parsed.
        NoMetadataError: if neither the Markdown nor the plain-text tier
                         yields more than ``settings.MIN_CONTENT_LENGTH`` chars.
    """
    _require_http(url)
    soup = parse_html(html)
    strip_noise(soup)

    meta = extract_metadata(soup, url, lenient_dates=lenient_dates)
    content = _extract_body(soup, url)

    return ArticleContent(
        title=meta["title"],
        thumbnail_url=meta["image"],
        description=meta["description"],
        published_date=meta["published_date"],
        author=meta["author"],
        word_count=len(content.split()),
        content=content,
    )


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def fetch_metadata(
    url: str,
    *,
    timeout: float | None = None,
    fetcher: Fetcher | None = None,
    lenient_dates: bool | None = None,
) -> ArticleMetadata:
    """Fetch *url* and return its :class:`ArticleMetadata`.

    Args:
        url:           http(s) URL (see :func:`validate_url` for user input).
        timeout:       Network timeout in seconds, forwarded to the fetcher.
        fetcher:       Optional ``fetcher(url, timeout) -> str | bytes``;
                       defaults to :func:`fetch_html`.
        lenient_dates: Allow the dateparser fallback for published dates.

    Raises:
        InvalidURLError, NetworkError, ParsingError
    """
    logger.info("fetch_metadata: %s", url)
    _require_http(url)
    html = _download(url, timeout, fetcher)
    return extract_metadata_from_html(html, url, lenient_dates=lenient_dates)


def fetch_content(
    url: str,
    *,
    timeout: float | None = None,
    fetcher: Fetcher | None = None,
    lenient_dates: bool | None = None,
) -> ArticleContent:
    """Fetch *url* and return metadata plus the Markdown article body.

    Arguments are as for :func:`fetch_metadata`.

    Raises:
        InvalidURLError, NetworkError, ParsingError, NoMetadataError

    Example::

        from articleparser.query import fetch_content

        article = fetch_content("https://example.com/blog/post")
        print(article.title)
        print(article.word_count)
        data = article.model_dump()
    """
    logger.info("fetch_content: %s", url)
    _require_http(url)
    html = _download(url, timeout, fetcher)
    return extract_content_from_html(html, url, lenient_dates=lenient_dates)


# ---------------------------------------------------------------------------
# Batch API
# ---------------------------------------------------------------------------

def fetch_batch(
    urls: list[str],
    *,
    mode: str = "content",
    max_workers: int | None = None,
    timeout: float | None = None,
    fetcher: Fetcher | None = None,
    on_error: str = "skip",
) -> list[ArticleMetadata | ArticleContent | None]:
    """Extract multiple URLs concurrently.

    Uses a :class:`~concurrent.futures.ThreadPoolExecutor`.  Results are
    returned in the same order as *urls* regardless of which requests finish
    first, and one URL failing never affects the others.

    Args:
        urls:        List of http(s) URLs.
        mode:        ``"content"`` (default) or ``"metadata"``.
        max_workers: Maximum concurrent extractions (default ``settings.MAX_WORKERS``).
        timeout:     Per-request network timeout in seconds.
        fetcher:     Optional custom fetcher shared by all extractions.
        on_error:    How to handle individual URL failures:
                     ``"skip"`` (default): omit failed URLs from results;
                     ``"raise"``: re-raise the first failure;
                     ``"include"``: include ``None`` in results for failures.

    Raises:
        :class:`ArticleExtractionError`: Only when ``on_error="raise"``.
        :class:`ValueError`: For unknown *mode* or *on_error* values.
    """
    from concurrent.futures import ThreadPoolExecutor, as_completed

    if mode not in ("content", "metadata"):
        raise ValueError(f"mode must be 'content' or 'metadata'; got {mode!r}")
    if on_error not in ("skip", "raise", "include"):
        raise ValueError(f"on_error must be 'skip', 'raise', or 'include'; got {on_error!r}")

    extract_one = fetch_content if mode == "content" else fetch_metadata
    results: list[ArticleMetadata | ArticleContent | None] = [None] * len(urls)

    def _fetch_one(idx: int, url: str) -> tuple[int, ArticleMetadata | ArticleContent | None]:
        try:
            return idx, extract_one(url, timeout=timeout, fetcher=fetcher)
        except ArticleExtractionError as exc:
            if on_error == "raise":
                raise
            logger.warning("fetch_batch: %s failed for %s: %s", exc.kind, url, exc)
            return idx, None

    with ThreadPoolExecutor(max_workers=max_workers or settings.MAX_WORKERS) as executor:
        futures = {
            executor.submit(_fetch_one, i, url): i
            for i, url in enumerate(urls)
        }
        for future in as_completed(futures):
            idx, article = future.result()
            results[idx] = article

    if on_error == "include":
        return results
    return [r for r in results if r is not None]
