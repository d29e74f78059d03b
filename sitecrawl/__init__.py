"""Site crawl & content classification engine."""

from sitecrawl.analysis import Role, calculate_priority_score, classify_page_role
from sitecrawl.scraper import ExtractedPage, discover_pages, scrape_page, scrape_site

__all__ = [
    "ExtractedPage",
    "Role",
    "discover_pages",
    "scrape_page",
    "scrape_site",
    "classify_page_role",
    "calculate_priority_score",
]
