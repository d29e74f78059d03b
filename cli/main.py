"""Site crawler CLI — entry-point for all crawl operations.

Usage:
    python cli/main.py --help

Commands:
    scrape          → extract, classify and score a single page
    crawl discover  → list the pages discovery finds
    crawl site      → crawl a whole site and rank its pages
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from sitecrawl.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from sitecrawl.analysis import calculate_priority_score, classify_page_role
from sitecrawl.logging_setup import configure_logging
from sitecrawl.scraper import scrape_page

from cli.commands.crawl import crawl_app

app = typer.Typer(
    name="sitecrawl",
    help="Site crawl & content classification CLI.",
    no_args_is_help=True,
)
app.add_typer(crawl_app, name="crawl")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: LOG_LEVEL or INFO)."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# Single-page scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="URL to scrape."),
    no_reader: bool = typer.Option(False, "--no-reader", help="Skip the reader service; parse HTML locally."),
) -> None:
    """Scrape a URL and print its metadata, role, score and extracted text."""
    typer.echo(f"[scrape] Fetching {url!r} …")
    page = scrape_page(url, use_reader=not no_reader)

    if page.failed:
        typer.echo(f"[scrape] Failed: {page.error}")
        raise typer.Exit(1)

    role = classify_page_role(page.url, page)
    score = calculate_priority_score(page, role)

    typer.echo(f"[scrape] HTTP   : {page.status_code}")
    typer.echo(f"[scrape] Title  : {page.title or '(none)'}")
    typer.echo(f"[scrape] Words  : {page.word_count}")
    typer.echo(f"[scrape] Links  : {len(page.internal_links)} internal, {len(page.external_links)} external")
    typer.echo(f"[scrape] Role   : {role.value}")
    typer.echo(f"[scrape] Score  : {score}")
    typer.echo("")
    typer.echo(page.cleaned_text)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
