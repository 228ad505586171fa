"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from articleparser.__main__ import _build_parser, main
from articleparser.errors import NetworkError

URL = "https://example.com/blog/readable-articles"


class TestArgumentParsing:
    def test_defaults(self):
        args = _build_parser().parse_args(["example.com"])
        assert args.url == "example.com"
        assert args.metadata_only is False
        assert args.json is False

    def test_rejects_unknown_log_level(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["example.com", "--log-level", "LOUD"])


class TestMain:
    def test_json_content(self, article_html, capsys):
        with patch("articleparser.parser.fetch_html", return_value=article_html):
            code = main(["example.com/blog/readable-articles", "--json"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["title"] == "How to Extract Readable Articles"
        assert data["published_date"].startswith("2024-01-15T09:30:00")
        assert data["content"].startswith("# How to Extract Readable Articles")

    def test_json_metadata_only(self, article_html, capsys):
        with patch("articleparser.parser.fetch_html", return_value=article_html):
            code = main([URL, "--json", "--metadata-only"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert "content" not in data
        assert data["thumbnail_url"] == "https://example.com/img/cover.jpg"

    def test_rich_output(self, article_html, capsys):
        with patch("articleparser.parser.fetch_html", return_value=article_html):
            code = main([URL])
        assert code == 0
        out = capsys.readouterr().out
        assert "How to Extract Readable Articles" in out
        assert "Jane Smith" in out

    def test_timeout_forwarded(self, article_html):
        with patch("articleparser.parser.fetch_html", return_value=article_html) as mock_http:
            main([URL, "--json", "--timeout", "4"])
        _, kwargs = mock_http.call_args
        assert kwargs["timeout"] == 4.0

    def test_invalid_url_exit_code(self, capsys):
        assert main(["exa mple.com"]) == 1
        assert "invalid_url" in capsys.readouterr().err

    def test_network_error_exit_code(self, capsys):
        with patch(
            "articleparser.parser.fetch_html",
            side_effect=NetworkError("HTTP 404", url=URL, status=404),
        ):
            assert main([URL]) == 1
        assert "ERROR (network_error)" in capsys.readouterr().err
