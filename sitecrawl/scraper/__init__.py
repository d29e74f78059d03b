"""Scraper package — discovery, content extraction and the site pipeline."""

from sitecrawl.scraper.discovery import discover_pages, fetch_sitemap_urls
from sitecrawl.scraper.extractor import scrape_page, scrape_with_parser, scrape_with_reader
from sitecrawl.scraper.models import ExtractedPage, Headings
from sitecrawl.scraper.pipeline import scrape_site

__all__ = [
    "discover_pages",
    "fetch_sitemap_urls",
    "scrape_page",
    "scrape_with_reader",
    "scrape_with_parser",
    "scrape_site",
    "ExtractedPage",
    "Headings",
]
