"""Tests for articleparser.parser: ArticleParser high-level class."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from articleparser import settings
from articleparser.items import ArticleContent, ArticleMetadata
from articleparser.parser import ArticleParser

URL = "https://example.com/blog/post"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_content(**kwargs) -> ArticleContent:
    defaults = {"title": "Post", "content": "Body text", "word_count": 2}
    defaults.update(kwargs)
    return ArticleContent(**defaults)


# ---------------------------------------------------------------------------
# Constructor
# ---------------------------------------------------------------------------

class TestArticleParserInit:
    def test_defaults(self):
        parser = ArticleParser()
        assert parser._timeout == settings.DEFAULT_TIMEOUT
        assert parser._user_agent is None
        assert parser._fetcher is None
        assert parser._lenient_dates is False

    def test_full_config(self):
        fetcher = MagicMock()
        parser = ArticleParser(timeout=5, user_agent="Bot/1.0", fetcher=fetcher, lenient_dates=True)
        assert parser._timeout == 5
        assert parser._user_agent == "Bot/1.0"
        assert parser._fetcher is fetcher
        assert parser._lenient_dates is True


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

class TestArticleParserFetch:
    def test_returns_article_content(self):
        parser = ArticleParser()
        article = _make_content()
        with patch("articleparser.parser._fetch_content", return_value=article) as mock_fetch:
            result = parser.fetch_content(URL)
        assert result is article
        mock_fetch.assert_called_once()

    def test_passes_url_positionally(self):
        parser = ArticleParser()
        with patch("articleparser.parser._fetch_content", return_value=_make_content()) as mock_fetch:
            parser.fetch_content(URL)
        args, _ = mock_fetch.call_args
        assert args[0] == URL

    def test_uses_constructor_timeout(self):
        parser = ArticleParser(timeout=45)
        with patch("articleparser.parser._fetch_content", return_value=_make_content()) as mock_fetch:
            parser.fetch_content(URL)
        _, kwargs = mock_fetch.call_args
        assert kwargs["timeout"] == 45

    def test_uses_constructor_lenient_dates(self):
        parser = ArticleParser(lenient_dates=True)
        with patch("articleparser.parser._fetch_metadata") as mock_fetch:
            parser.fetch_metadata(URL)
        _, kwargs = mock_fetch.call_args
        assert kwargs["lenient_dates"] is True

    def test_custom_fetcher_forwarded(self):
        fetcher = MagicMock()
        parser = ArticleParser(fetcher=fetcher)
        with patch("articleparser.parser._fetch_metadata") as mock_fetch:
            parser.fetch_metadata(URL)
        _, kwargs = mock_fetch.call_args
        assert kwargs["fetcher"] is fetcher

    def test_user_agent_reaches_http_layer(self, article_html):
        parser = ArticleParser(timeout=12, user_agent="Bot/1.0")
        with patch("articleparser.parser.fetch_html", return_value=article_html) as mock_http:
            article = parser.fetch_content(URL)
        mock_http.assert_called_once_with(URL, timeout=12, user_agent="Bot/1.0")
        assert article.title == "How to Extract Readable Articles"

    def test_custom_fetcher_end_to_end(self, article_html):
        parser = ArticleParser(fetcher=lambda url, timeout: article_html)
        meta = parser.fetch_metadata(URL)
        assert isinstance(meta, ArticleMetadata)
        assert meta.author == "Jane Smith"


# ---------------------------------------------------------------------------
# Parsing pre-fetched HTML
# ---------------------------------------------------------------------------

class TestArticleParserParse:
    def test_parse_content(self, article_html, article_url):
        article = ArticleParser().parse_content(article_html, article_url)
        assert isinstance(article, ArticleContent)
        assert article.content.startswith("# How to Extract Readable Articles")

    def test_parse_metadata(self, article_html, article_url):
        meta = ArticleParser().parse_metadata(article_html, article_url)
        assert meta.thumbnail_url == "https://example.com/img/cover.jpg"

    def test_no_network_calls(self, article_html, article_url):
        with patch("urllib.request.urlopen") as mock_urlopen:
            ArticleParser().parse_content(article_html, article_url)
        mock_urlopen.assert_not_called()

    def test_validate_url(self):
        assert ArticleParser().validate_url("example.com/x") == "https://example.com/x"
