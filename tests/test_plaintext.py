"""Unit tests for the plain-text fallback."""

from __future__ import annotations

import pytest

from articleparser.extractors.dom import parse_html
from articleparser.extractors.main_content import find_main_content
from articleparser.extractors.plaintext import (
    container_to_text,
    filter_paragraphs,
    is_boilerplate,
    split_paragraphs,
)


def _div(inner: str):
    return parse_html(f"<html><body><div id='c'>{inner}</div></body></html>").select_one("#c")


class TestSplitParagraphs:
    def test_blank_lines_separate(self):
        assert split_paragraphs("one\n\ntwo\n\n\nthree") == ["one", "two", "three"]

    def test_single_newline_joins(self):
        assert split_paragraphs("line one\nline two") == ["line one line two"]

    def test_whitespace_collapsed(self):
        assert split_paragraphs("  a   b \t c  ") == ["a b c"]

    def test_empty(self):
        assert split_paragraphs("") == []


class TestBoilerplate:
    @pytest.mark.parametrize(
        "paragraph",
        [
            "We use COOKIES to improve your experience on this site.",
            "Read our Privacy Policy before continuing any further.",
            "Subscribe now and never miss another post from us.",
            "Copyright © 2024 Example Media Group and partners.",
            "Follow Us on social media for daily updates and news.",
        ],
    )
    def test_detected(self, paragraph):
        assert is_boilerplate(paragraph)

    def test_article_prose_kept(self):
        assert not is_boilerplate("The committee published its findings on Tuesday.")

    def test_filter_drops_short_and_boilerplate(self):
        paragraphs = [
            "x" * 30,
            "y" * 31,
            "Share this story with your friends and family today.",
            "  A perfectly ordinary sentence about the weather outside.  ",
        ]
        assert filter_paragraphs(paragraphs) == [
            "y" * 31,
            "A perfectly ordinary sentence about the weather outside.",
        ]


class TestContainerToText:
    def test_br_pairs_split_paragraphs(self, minimal_article_html):
        container = find_main_content(parse_html(minimal_article_html))
        text = container_to_text(container)
        paragraphs = text.split("\n\n")
        assert len(paragraphs) == 3
        assert paragraphs[0].startswith("First paragraph of a post")
        assert paragraphs[2].startswith("Third paragraph wraps things up")
        assert "Follow us" not in text
        assert len(text) > 200

    def test_single_br_stays_in_paragraph(self):
        text = container_to_text(
            _div("The first line of a longer thought<br>continues right here on the next line."),
        )
        assert text == "The first line of a longer thought continues right here on the next line."

    def test_block_boundaries_become_spaces(self):
        text = container_to_text(
            _div("<p>Tiny</p><p>bits</p><p>of</p><p>text</p><span>that add up to a sentence.</span>"),
        )
        assert text == "Tiny bits of text that add up to a sentence."

    def test_scripts_ignored(self):
        text = container_to_text(
            _div("<script>var x = 'some long script body here';</script>"
                 "Visible paragraph text that is long enough to keep around."),
        )
        assert text == "Visible paragraph text that is long enough to keep around."

    def test_empty_container(self):
        assert container_to_text(_div("")) == ""
