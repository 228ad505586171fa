"""CLI entry point: python -m articleparser URL [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from articleparser import settings
from articleparser.errors import ArticleExtractionError
from articleparser.items import ArticleContent, ArticleMetadata
from articleparser.parser import ArticleParser

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="articleparser",
        description=(
            "Extract a clean title, metadata and a Markdown body from any article URL.\n"
            "No JavaScript execution; static HTML only."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("url", metavar="URL",
                        help="Article URL (scheme optional; https:// is assumed)")
    parser.add_argument("--metadata-only", action="store_true", default=False,
                        help="Only extract title/description/thumbnail/date")
    parser.add_argument("--json", action="store_true", default=False,
                        help="Print the result as JSON instead of rendered Markdown")
    parser.add_argument("--timeout", type=float, default=settings.DEFAULT_TIMEOUT, metavar="SECS",
                        help=f"Network timeout in seconds (default: {settings.DEFAULT_TIMEOUT:g})")
    parser.add_argument("--lenient-dates", action="store_true", default=settings.LENIENT_DATES,
                        help="Accept free-form publication dates")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    return parser


def _print_article(console: Console, article: ArticleMetadata) -> None:
    lines = [f"[bold cyan]{escape(article.title)}[/bold cyan]"]
    if article.author:
        lines.append(f"Author:     {escape(article.author)}")
    if article.published_date:
        lines.append(f"Published:  {article.published_date.isoformat()}")
    if article.thumbnail_url:
        lines.append(f"Thumbnail:  [green]{escape(article.thumbnail_url)}[/green]")
    if article.word_count:
        lines.append(f"Words:      {article.word_count}")
    if article.description:
        lines.append("")
        lines.append(f"[italic]{escape(article.description)}[/italic]")

    console.print(Panel.fit("\n".join(lines), border_style="cyan", title="[bold]Article[/bold]"))
    if isinstance(article, ArticleContent):
        console.print(Markdown(article.content))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(level=args.log_level, format=settings.LOG_FORMAT)

    parser = ArticleParser(timeout=args.timeout, lenient_dates=args.lenient_dates)
    try:
        url = parser.validate_url(args.url)
        if args.metadata_only:
            article: ArticleMetadata = parser.fetch_metadata(url)
        else:
            article = parser.fetch_content(url)
    except ArticleExtractionError as exc:
        logger.debug("Extraction failed for %s", args.url, exc_info=True)
        print(f"ERROR ({exc.kind}): {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(article.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        _print_article(Console(), article)
    return 0


if __name__ == "__main__":
    sys.exit(main())
