"""Crawl commands: discover a site's pages or crawl and rank the whole site."""

from __future__ import annotations

import json
import re
from typing import List, Optional

import typer

from sitecrawl.analysis import assess_site
from sitecrawl.config import settings
from sitecrawl.scraper import discover_pages, scrape_site

from cli.rendering import render_ranking

crawl_app = typer.Typer(help="Discover and crawl whole sites.", no_args_is_help=True)


def _checked_patterns(patterns: Optional[List[str]]) -> list[str]:
    """Reject invalid exclude regexes before any network work starts."""
    checked = list(patterns or [])
    for pattern in checked:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise typer.BadParameter(f"invalid regex {pattern!r}: {exc}", param_hint="--exclude")
    return checked


@crawl_app.command("discover")
def crawl_discover(
    url: str = typer.Option(..., help="Start URL."),
    max_pages: int = typer.Option(settings.default_max_pages, min=1, help="Maximum pages to return."),
    max_depth: int = typer.Option(settings.default_max_depth, min=0, help="Maximum link depth."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="Regex to exclude (repeatable)."),
) -> None:
    """List the pages discovery finds, one URL per line."""
    patterns = _checked_patterns(exclude)
    typer.echo(f"[discover] Discovering pages from {url!r} …", err=True)
    urls = discover_pages(url, max_pages, max_depth, patterns)
    for found in urls:
        typer.echo(found)
    typer.echo(f"[discover] {len(urls)} page(s).", err=True)


@crawl_app.command("site")
def crawl_site(
    url: str = typer.Option(..., help="Start URL."),
    max_pages: int = typer.Option(settings.default_max_pages, min=1, help="Maximum pages to crawl."),
    max_depth: int = typer.Option(settings.default_max_depth, min=0, help="Maximum link depth."),
    no_reader: bool = typer.Option(False, "--no-reader", help="Skip the reader service; parse HTML locally."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="Regex to exclude (repeatable)."),
    as_json: bool = typer.Option(False, "--json", help="Print the assessment as JSON."),
) -> None:
    """Crawl a site, then print its pages ranked by priority score."""
    patterns = _checked_patterns(exclude)

    def _progress(current: int, total: int, page_url: str) -> None:
        typer.echo(f"[crawl] {current}/{total} {page_url}", err=True)

    pages = scrape_site(
        url,
        max_pages=max_pages,
        max_depth=max_depth,
        use_reader=not no_reader,
        exclude_patterns=patterns,
        on_progress=_progress,
    )
    assessment = assess_site(pages)

    if as_json:
        typer.echo(json.dumps(assessment.to_dict(), indent=2))
    else:
        typer.echo(render_ranking(assessment))
