"""Content extraction strategies and the fallback chain that composes them.

Strategy order for the default chain:
  1. Reader  — remote markdown-extraction service (``settings.reader_base_url``).
  2. Parser  — direct fetch parsed locally with BeautifulSoup.

Every strategy shares one interface: ``extract(url) -> ExtractedPage``, raising
an :class:`~sitecrawl.scraper.errors.ExtractionError` on failure.  The
:class:`ExtractionChain` tries each strategy in order and returns the first
page produced.  If every strategy fails the chain returns a failed page; it
never raises.
"""

from __future__ import annotations

import hashlib
import logging
import re
from abc import ABC, abstractmethod

from bs4 import BeautifulSoup

from sitecrawl.config import settings
from sitecrawl.scraper.errors import (
    ExtractionError,
    NetworkError,
    NonHtmlContentError,
    ReaderServiceError,
)
from sitecrawl.scraper.fetcher import HTML_ACCEPT, fetch_url
from sitecrawl.scraper.links import partition_links
from sitecrawl.scraper.models import ExtractedPage, Headings

logger = logging.getLogger(__name__)

_MD_LINK_RE = re.compile(r"\[([^\]]*)\]\(([^)]+)\)")
_MD_FORMATTING_RE = re.compile(r"[#*_`]")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

_CHROME_SELECTOR = (
    "script, style, nav, footer, header, aside, "
    ".sidebar, .menu, .navigation, .cookie-notice, .popup"
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def text_fingerprint(text: str) -> tuple[int, str]:
    """Return ``(word_count, md5_hex)`` for *text*."""
    return len(text.split()), hashlib.md5(text.encode("utf-8")).hexdigest()


def _tag_text(tag) -> str:
    """Visible text of a BeautifulSoup tag with whitespace collapsed."""
    return " ".join(tag.get_text(" ").split())


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class ContentExtractionStrategy(ABC):
    """Abstract base class for a single way of turning a URL into a page."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short strategy name used in log lines."""

    @abstractmethod
    def extract(self, url: str) -> ExtractedPage:
        """Return the extracted page.  Raise ``ExtractionError`` on failure."""


# ---------------------------------------------------------------------------
# Remote reader strategy
# ---------------------------------------------------------------------------

def parse_markdown_outline(markdown: str) -> tuple[str | None, str | None, Headings]:
    """Pull ``(title, h1, headings)`` out of reader markdown.

    ``Title: `` supplies the title, the first ``# `` line the h1.  Later
    ``# `` lines are ignored; ``## `` and ``### `` lines are collected in order.
    """
    title: str | None = None
    h1: str | None = None
    headings = Headings()

    for line in markdown.split("\n"):
        if line.startswith("# ") and h1 is None:
            h1 = line[2:].strip()
            headings.h1.append(h1)
        elif line.startswith("## "):
            headings.h2.append(line[3:].strip())
        elif line.startswith("### "):
            headings.h3.append(line[4:].strip())
        elif line.startswith("Title: ") and title is None:
            title = line[7:].strip()

    return title, h1, headings


def markdown_link_targets(markdown: str) -> list[str]:
    """Targets of every ``[text](target)`` link, minus any ``"title"`` suffix."""
    targets: list[str] = []
    for match in _MD_LINK_RE.finditer(markdown):
        parts = match.group(2).split()
        if parts:
            targets.append(parts[0])
    return targets


def clean_markdown(markdown: str) -> str:
    """Reduce reader markdown to plain text."""
    text = _MD_LINK_RE.sub(r"\1", markdown)
    text = _MD_FORMATTING_RE.sub("", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


class ReaderStrategy(ContentExtractionStrategy):
    """Fetch the page through the remote reader service as plain markdown.

    The reader does not expose the origin's HTTP status, meta description,
    canonical or language, so ``status_code`` is a synthetic 200 and the other
    three fields are always ``None``.
    """

    @property
    def name(self) -> str:
        return "reader"

    def extract(self, url: str) -> ExtractedPage:
        reader_url = f"{settings.reader_base_url}{url}"
        logger.debug("Fetching %s via reader", url)
        try:
            response = fetch_url(reader_url, settings.reader_timeout, accept="text/plain")
        except NetworkError as exc:
            raise ReaderServiceError(f"Reader service unavailable: {exc}") from exc

        if not response.is_success:
            raise ReaderServiceError(f"Reader service failed: {response.status_code}")

        markdown = response.text
        title, h1, headings = parse_markdown_outline(markdown)
        internal, external = partition_links(markdown_link_targets(markdown), url)
        cleaned = clean_markdown(markdown)
        word_count, text_hash = text_fingerprint(cleaned)
        logger.debug("Reader success for %s (%d chars)", url, len(markdown))

        return ExtractedPage(
            url=url,
            status_code=200,
            title=title or h1,
            h1=h1,
            meta_description=None,
            canonical=None,
            lang=None,
            word_count=word_count,
            text_hash=text_hash,
            cleaned_text=cleaned,
            markdown_content=markdown,
            internal_links=internal,
            external_links=external,
            headings=headings,
        )


# ---------------------------------------------------------------------------
# Local HTML parser strategy
# ---------------------------------------------------------------------------

def _meta_content(soup: BeautifulSoup, **attrs) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def _document_lang(soup: BeautifulSoup) -> str | None:
    """``<html lang>``, falling back to ``<meta http-equiv="content-language">``."""
    html_tag = soup.find("html")
    if html_tag is not None and html_tag.get("lang"):
        return html_tag["lang"].strip() or None
    return _meta_content(soup, **{"http-equiv": re.compile(r"^content-language$", re.I)})


def _strip_chrome(soup: BeautifulSoup) -> None:
    """Remove scripts, navigation and other non-content elements in place."""
    for tag in soup.select(_CHROME_SELECTOR):
        if not tag.decomposed:
            tag.decompose()


class HtmlParserStrategy(ContentExtractionStrategy):
    """Fetch the page directly and parse its DOM with BeautifulSoup."""

    @property
    def name(self) -> str:
        return "parser"

    def extract(self, url: str) -> ExtractedPage:
        response = fetch_url(url, settings.page_timeout, accept=HTML_ACCEPT)

        content_type = response.headers.get("content-type", "").lower()
        if "text/html" not in content_type:
            raise NonHtmlContentError("Not an HTML page")

        return self.parse(url, response.text, response.status_code)

    def parse(self, url: str, html: str, status_code: int = 200) -> ExtractedPage:
        """Build an :class:`ExtractedPage` from already-fetched *html*."""
        soup = BeautifulSoup(html, "html.parser")

        title_tag = soup.find("title")
        title = _tag_text(title_tag) if title_tag else ""
        first_h1 = soup.find("h1")
        h1 = _tag_text(first_h1) if first_h1 else ""

        canonical = None
        canonical_tag = soup.find("link", rel="canonical")
        if canonical_tag is not None and canonical_tag.get("href"):
            canonical = canonical_tag["href"].strip() or None

        meta_description = _meta_content(soup, name="description")
        lang = _document_lang(soup)

        headings = Headings(
            h1=[_tag_text(t) for t in soup.find_all("h1")],
            h2=[_tag_text(t) for t in soup.find_all("h2")],
            h3=[_tag_text(t) for t in soup.find_all("h3")],
        )

        # Links are taken before chrome removal so nav/footer links count.
        internal, external = partition_links(
            (a.get("href") for a in soup.find_all("a", href=True)), url
        )

        _strip_chrome(soup)
        container = soup.body or soup
        cleaned = " ".join(container.get_text(" ").split())
        cleaned = cleaned[: settings.max_text_chars].rstrip()
        word_count, text_hash = text_fingerprint(cleaned)

        return ExtractedPage(
            url=url,
            status_code=status_code,
            title=title or None,
            h1=h1 or None,
            meta_description=meta_description,
            canonical=canonical,
            lang=lang,
            word_count=word_count,
            text_hash=text_hash,
            cleaned_text=cleaned,
            markdown_content=f"# {title or 'Untitled'}\n\n{cleaned}",
            internal_links=internal,
            external_links=external,
            headings=headings,
        )


# ---------------------------------------------------------------------------
# Strategy chain
# ---------------------------------------------------------------------------

class ExtractionChain:
    """Try strategies in order; return the first page any of them produces."""

    def __init__(self, strategies: list[ContentExtractionStrategy]) -> None:
        self._strategies = strategies

    @property
    def strategies(self) -> list[ContentExtractionStrategy]:
        return list(self._strategies)

    def extract(self, url: str) -> ExtractedPage:
        last_error = "No extraction strategy configured"
        for strategy in self._strategies:
            try:
                return strategy.extract(url)
            except ExtractionError as exc:
                last_error = str(exc)
                logger.info("[%s] failed for %s: %s", strategy.name, url, exc)
            except Exception as exc:
                last_error = f"{type(exc).__name__}: {exc}"
                logger.exception("[%s] unexpected error for %s", strategy.name, url)
        return ExtractedPage.failure(url, last_error)
