"""Error taxonomy for the extraction engine.

Every public operation raises a subclass of :class:`ArticleExtractionError`.
The underlying exception (socket timeout, HTTP error, parser crash) is kept on
``cause`` and chained with ``raise ... from`` so tracebacks stay intact.
"""

from __future__ import annotations


class ArticleExtractionError(Exception):
    """Base class for all extraction failures.

    Attributes:
        url   -- the URL being processed ("" when not known)
        cause -- the underlying exception, if any
    """

    kind = "extraction_error"
    default_message = "Article extraction failed."

    def __init__(
        self,
        message: str = "",
        url: str = "",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.url = url
        self.cause = cause


class InvalidURLError(ArticleExtractionError):
    """The URL is malformed or does not use http/https."""

    kind = "invalid_url"
    default_message = "The URL is invalid or malformed."


class NetworkError(ArticleExtractionError):
    """Transport failure, timeout, or non-success HTTP status."""

    kind = "network_error"
    default_message = "Network error while fetching the page."

    def __init__(
        self,
        message: str = "",
        url: str = "",
        cause: BaseException | None = None,
        status: int = 0,
    ) -> None:
        super().__init__(message, url=url, cause=cause)
        self.status = status


class ParsingError(ArticleExtractionError):
    """The HTML could not be turned into a document at all."""

    kind = "parsing_error"
    default_message = "Failed to parse the article HTML."


class NoMetadataError(ArticleExtractionError):
    """The page parsed but no extraction tier produced usable content."""

    kind = "no_metadata"
    default_message = "No metadata or readable content found for this article."
