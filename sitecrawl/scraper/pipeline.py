"""Full-site crawl pipeline.

``scrape_site`` orchestrates the whole crawl:

    discover → (for each URL, in order) progress callback → extract → delay

Extraction is strictly sequential.  A page that fails to extract is returned
as a failed :class:`~sitecrawl.scraper.models.ExtractedPage`; it never stops
the crawl.  Classification and scoring are left to the caller so they can be
recomputed without crawling again.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from sitecrawl.config import settings
from sitecrawl.scraper.discovery import ExcludePattern, discover_pages
from sitecrawl.scraper.extractor import scrape_page
from sitecrawl.scraper.models import ExtractedPage

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def scrape_site(
    start_url: str,
    *,
    max_pages: int = 50,
    max_depth: int = 3,
    use_reader: bool = True,
    exclude_patterns: Iterable[ExcludePattern] = (),
    on_progress: Optional[ProgressCallback] = None,
) -> list[ExtractedPage]:
    """Discover pages from *start_url* and extract each one.

    Args:
        start_url: Absolute URL to start discovery from.
        max_pages: Upper bound on pages discovered (and therefore extracted).
        max_depth: Maximum link depth followed by discovery.
        use_reader: Passed through to :func:`scrape_page`.
        exclude_patterns: Regexes passed through to :func:`discover_pages`.
        on_progress: Called as ``on_progress(current, total, url)`` with a
            1-based *current* before each page is extracted.

    Returns:
        One :class:`ExtractedPage` per discovered URL, in discovery order.
    """
    urls = discover_pages(start_url, max_pages, max_depth, exclude_patterns)
    total = len(urls)

    results: list[ExtractedPage] = []
    for index, url in enumerate(urls, start=1):
        if on_progress is not None:
            on_progress(index, total, url)

        page = scrape_page(url, use_reader=use_reader)
        if page.failed:
            logger.warning("Extraction failed for %s: %s", url, page.error)
        results.append(page)

        time.sleep(settings.extraction_delay)

    logger.info(
        "Crawl of %s finished: %d pages, %d failed",
        start_url, total, sum(1 for p in results if p.failed),
    )
    return results
