"""articleparser - readable Markdown and metadata from any article page.

Quick single-URL usage::

    from articleparser import fetch_content, validate_url

    article = fetch_content(validate_url("example.com/blog/some-post"))
    print(article.title)
    print(article.content)

Link previews::

    from articleparser import fetch_metadata

    meta = fetch_metadata("https://example.com/blog/some-post")
    print(meta.title, meta.thumbnail_url, meta.published_date)

Errors::

    from articleparser import ArticleExtractionError

    try:
        fetch_content(url)
    except ArticleExtractionError as exc:
        print(exc.kind, exc)
"""

from articleparser.errors import (
    ArticleExtractionError,
    InvalidURLError,
    NetworkError,
    NoMetadataError,
    ParsingError,
)
from articleparser.items import ArticleContent, ArticleMetadata
from articleparser.parser import ArticleParser
from articleparser.query import (
    extract_content_from_html,
    extract_metadata_from_html,
    fetch_batch,
    fetch_content,
    fetch_html,
    fetch_metadata,
    validate_url,
)

__version__ = "0.1.0"
__all__ = [
    "ArticleContent",
    "ArticleExtractionError",
    "ArticleMetadata",
    "ArticleParser",
    "InvalidURLError",
    "NetworkError",
    "NoMetadataError",
    "ParsingError",
    "extract_content_from_html",
    "extract_metadata_from_html",
    "fetch_batch",
    "fetch_content",
    "fetch_html",
    "fetch_metadata",
    "validate_url",
]
