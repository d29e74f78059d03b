"""Exception types raised inside the scraper.

None of these cross ``scrape_page``: extraction errors are converted into a
failed :class:`~sitecrawl.scraper.models.ExtractedPage`, discovery absorbs
fetch errors per URL, and malformed links are dropped where they are found.
"""

from __future__ import annotations


class CrawlError(Exception):
    """Base class for every scraper error."""


class MalformedUrlError(CrawlError):
    """A link could not be resolved to an absolute http(s) URL."""


class ExtractionError(CrawlError):
    """A content extraction strategy could not produce a page."""


class NetworkError(ExtractionError):
    """Transport failure or timeout on a direct page fetch."""


class NonHtmlContentError(ExtractionError):
    """The local parser received a response that is not ``text/html``."""


class ReaderServiceError(ExtractionError):
    """The remote reader service answered non-2xx, timed out, or was unreachable."""
