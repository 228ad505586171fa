"""URL validation and image-reference resolution."""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

from articleparser.errors import InvalidURLError

_HTTP_SCHEMES: frozenset[str] = frozenset({"http", "https"})
_HTTP_PREFIXES: tuple[str, ...] = ("http://", "https://")

_WHITESPACE_RE = re.compile(r"\s")


def normalize_url(raw: str) -> str:
    """Turn user-entered *raw* text into a fetchable http(s) URL.

    Transformations applied:
    - Trim surrounding whitespace
    - Prepend ``https://`` when no http/https scheme is present

    Raises:
        InvalidURLError: when the result has no host, a non-http(s) scheme,
            or embedded whitespace.
    """
    candidate = (raw or "").strip()
    if not candidate.lower().startswith(_HTTP_PREFIXES):
        candidate = "https://" + candidate

    if _WHITESPACE_RE.search(candidate):
        raise InvalidURLError(f"URL contains whitespace: {raw!r}", url=raw)

    try:
        parsed = urlsplit(candidate)
        host = parsed.hostname
        _ = parsed.port  # ValueError for a non-numeric port
    except ValueError as exc:
        raise InvalidURLError(f"Malformed URL: {raw!r}", url=raw, cause=exc) from exc

    if parsed.scheme not in _HTTP_SCHEMES or not host:
        raise InvalidURLError(f"Not an http(s) URL with a host: {raw!r}", url=raw)
    # A dangling colon means another scheme got prefixed: "https://ftp://host"
    if parsed.netloc.endswith(":"):
        raise InvalidURLError(f"Unsupported URL scheme: {raw!r}", url=raw)
    return candidate


def has_http_scheme(url: str) -> bool:
    """Return True if *url* uses http or https."""
    try:
        return urlsplit(url.strip()).scheme in _HTTP_SCHEMES
    except ValueError:
        return False


def extract_domain(url: str) -> str:
    """Return the host component of a URL, lowercased, without port."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def resolve_image_url(ref: str, base_url: str) -> str | None:
    """Resolve an image reference found in the page against *base_url*.

    - ``http(s)://…`` passes through unchanged
    - ``//host/…`` becomes ``https://host/…``
    - ``/path`` is joined to the base URL's scheme and host; the base URL's
      query and fragment are not carried over
    - ``data:`` URIs pass through unchanged

    Anything else (``javascript:``, bare relative paths, junk) returns None
    and the caller drops the image.
    """
    ref = (ref or "").strip()
    if not ref:
        return None

    lowered = ref.lower()
    if lowered.startswith(_HTTP_PREFIXES):
        return ref
    if ref.startswith("//"):
        return "https:" + ref
    if ref.startswith("/"):
        try:
            base = urlsplit(base_url)
            target = urlsplit(ref)
            port = base.port
        except ValueError:
            return None
        if base.scheme not in _HTTP_SCHEMES or not base.hostname:
            return None
        # Userinfo from the page URL never leaks into image URLs
        host = f"[{base.hostname}]" if ":" in base.hostname else base.hostname
        netloc = host if port is None else f"{host}:{port}"
        return urlunsplit((base.scheme, netloc, target.path, target.query, ""))
    if lowered.startswith("data:"):
        return ref
    return None
