"""Tests for the CLI: 'scrape' and the 'crawl' command group."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from cli.main import app
from sitecrawl.scraper.models import ExtractedPage, Headings

runner = CliRunner()

URLS = ["https://example.com", "https://example.com/about"]


def _pages() -> list[ExtractedPage]:
    return [
        ExtractedPage(
            url="https://example.com",
            status_code=200,
            title="Home",
            internal_links=["https://example.com/about"],
        ),
        ExtractedPage(url="https://example.com/about", status_code=200, title="About"),
        ExtractedPage.failure("https://example.com/down", "Failed to fetch"),
    ]


# ---------------------------------------------------------------------------
# scrape
# ---------------------------------------------------------------------------

def test_scrape_prints_metadata_and_text():
    """scrape prints status, title, role and score, then the cleaned text."""
    page = ExtractedPage(
        url="https://example.com/pricing",
        status_code=200,
        title="Pricing",
        h1="Pricing",
        word_count=3,
        cleaned_text="Plans from 10",
        headings=Headings(h1=["Pricing"]),
    )
    with patch("cli.main.scrape_page", return_value=page) as scrape:
        result = runner.invoke(app, ["--log-level", "WARNING", "scrape", "--url", page.url, "--no-reader"])

    assert result.exit_code == 0, result.output
    assert "Title  : Pricing" in result.stdout
    assert "Role   : money" in result.stdout
    assert "Score  : 110" in result.stdout
    assert "Plans from 10" in result.stdout
    scrape.assert_called_once_with(page.url, use_reader=False)


def test_scrape_failure_exits_non_zero():
    failed = ExtractedPage.failure("https://example.com/down", "Timed out fetching https://example.com/down")
    with patch("cli.main.scrape_page", return_value=failed):
        result = runner.invoke(app, ["scrape", "--url", failed.url])

    assert result.exit_code == 1
    assert "Failed: Timed out fetching" in result.stdout


# ---------------------------------------------------------------------------
# crawl discover
# ---------------------------------------------------------------------------

def test_crawl_discover_lists_urls():
    with patch("cli.commands.crawl.discover_pages", return_value=URLS) as discover:
        result = runner.invoke(
            app,
            ["crawl", "discover", "--url", "https://example.com/", "--max-pages", "5",
             "--max-depth", "1", "--exclude", "/blog", "--exclude", r"\?page="],
        )

    assert result.exit_code == 0, result.output
    for url in URLS:
        assert url in result.stdout
    discover.assert_called_once_with("https://example.com/", 5, 1, ["/blog", r"\?page="])


def test_crawl_discover_rejects_bad_regex():
    with patch("cli.commands.crawl.discover_pages") as discover:
        result = runner.invoke(app, ["crawl", "discover", "--url", "https://example.com/", "--exclude", "("])

    assert result.exit_code == 2
    discover.assert_not_called()


def test_crawl_discover_rejects_zero_max_pages():
    result = runner.invoke(app, ["crawl", "discover", "--url", "https://example.com/", "--max-pages", "0"])
    assert result.exit_code == 2


# ---------------------------------------------------------------------------
# crawl site
# ---------------------------------------------------------------------------

def test_crawl_site_table():
    with patch("cli.commands.crawl.scrape_site", return_value=_pages()) as crawl:
        result = runner.invoke(app, ["crawl", "site", "--url", "https://example.com/", "--no-reader"])

    assert result.exit_code == 0, result.output
    assert "https://example.com/about" in result.stdout
    assert "Pages found: 3  crawled: 2  failed: 1" in result.stdout
    assert "https://example.com/down: Failed to fetch" in result.stdout

    _, kwargs = crawl.call_args
    assert kwargs["use_reader"] is False
    assert callable(kwargs["on_progress"])


def test_crawl_site_json():
    with patch("cli.commands.crawl.scrape_site", return_value=_pages()):
        result = runner.invoke(app, ["--log-level", "WARNING", "crawl", "site", "--url", "https://example.com/", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["pages_found"] == 3
    assert data["pages_crawled"] == 2
    assert [p["rank"] for p in data["pages"]] == [1, 2]
    assert data["pages"][0]["url"] == "https://example.com"
    assert data["pages"][0]["role"] == "money"


def test_crawl_site_reports_progress():
    def fake_scrape_site(url, **kwargs):
        kwargs["on_progress"](1, 1, "https://example.com")
        return _pages()[:1]

    with patch("cli.commands.crawl.scrape_site", side_effect=fake_scrape_site):
        result = runner.invoke(app, ["crawl", "site", "--url", "https://example.com/"])

    assert result.exit_code == 0, result.output
    assert "[crawl] 1/1 https://example.com" in result.output
