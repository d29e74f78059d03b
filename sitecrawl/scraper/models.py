"""Data models for the crawl pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Headings:
    """Heading texts in document order, one list per level."""

    h1: list[str] = field(default_factory=list)
    h2: list[str] = field(default_factory=list)
    h3: list[str] = field(default_factory=list)


@dataclass
class ExtractedPage:
    """Normalized content of a single page, as produced by ``scrape_page``.

    A record with ``error`` set represents a failed fetch: every text field is
    empty and every numeric field is zero.  There is no partial-success state.
    ``internal_links`` and ``external_links`` are deduplicated and keep the
    order in which links first appeared on the page.
    """

    url: str
    status_code: int = 0
    title: str | None = None
    h1: str | None = None
    meta_description: str | None = None
    canonical: str | None = None
    lang: str | None = None
    word_count: int = 0
    text_hash: str = ""
    cleaned_text: str = ""
    markdown_content: str = ""
    internal_links: list[str] = field(default_factory=list)
    external_links: list[str] = field(default_factory=list)
    headings: Headings = field(default_factory=Headings)
    error: str | None = None

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    @classmethod
    def failure(cls, url: str, reason: str) -> ExtractedPage:
        """Return the zeroed record used for a page that could not be extracted."""
        return cls(url=url, error=reason or "Unknown error")

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (JSON-ready)."""
        return asdict(self)
