"""Single-page content extraction: a URL in, an :class:`ExtractedPage` out.

None of the functions here raise.  Failures come back as a page whose
``error`` is set and whose content fields are all empty.
"""

from __future__ import annotations

from sitecrawl.scraper.models import ExtractedPage
from sitecrawl.scraper.strategies import (
    ExtractionChain,
    HtmlParserStrategy,
    ReaderStrategy,
)


def build_chain(use_reader: bool = True) -> ExtractionChain:
    """Reader → parser when *use_reader* is set, otherwise the parser alone."""
    if use_reader:
        return ExtractionChain([ReaderStrategy(), HtmlParserStrategy()])
    return ExtractionChain([HtmlParserStrategy()])


def scrape_page(url: str, *, use_reader: bool = True) -> ExtractedPage:
    """Extract *url* with the reader service, falling back to local parsing.

    Args:
        url: Absolute page URL.
        use_reader: When ``False`` the reader service is skipped and the page
            is fetched and parsed locally straight away.

    Returns:
        The extracted page.  If every strategy fails, a page with
        ``status_code == 0`` and ``error`` holding the last failure reason.
    """
    return build_chain(use_reader).extract(url)


def scrape_with_reader(url: str) -> ExtractedPage:
    """Extract *url* through the reader service only (no local fallback)."""
    return ExtractionChain([ReaderStrategy()]).extract(url)


def scrape_with_parser(url: str) -> ExtractedPage:
    """Fetch and parse *url* locally only."""
    return ExtractionChain([HtmlParserStrategy()]).extract(url)
