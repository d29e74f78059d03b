"""Internal link graph of a finished crawl.

Each extracted page already carries its outgoing ``internal_links``; this
module turns a crawl's pages into explicit edges and inbound link counts,
which is what link-equity checks and orphan detection need.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from sitecrawl.scraper.links import normalize_url
from sitecrawl.scraper.models import ExtractedPage

# Outgoing internal links recorded per page.
MAX_LINKS_PER_PAGE = 100


@dataclass(frozen=True)
class LinkEdge:
    from_url: str
    to_url: str
    is_internal: bool = True


@dataclass
class LinkGraph:
    edges: list[LinkEdge] = field(default_factory=list)
    inbound_counts: dict[str, int] = field(default_factory=dict)

    def inbound(self, url: str) -> int:
        """Number of recorded internal links pointing at *url*."""
        return self.inbound_counts.get(normalize_url(url), 0)

    def orphans(self) -> list[str]:
        """Crawled pages that no other crawled page links to."""
        return [url for url, count in self.inbound_counts.items() if count == 0]


def build_link_graph(
    pages: Iterable[ExtractedPage],
    *,
    max_links_per_page: int = MAX_LINKS_PER_PAGE,
) -> LinkGraph:
    """Build edges and inbound counts from successfully extracted *pages*.

    Link targets and page URLs are compared after :func:`normalize_url`, so
    ``/pricing/`` and ``/pricing?ref=nav`` both count towards ``/pricing``.
    Failed pages contribute neither edges nor nodes.
    """
    crawled = [p for p in pages if not p.failed]
    edges = [
        LinkEdge(from_url=page.url, to_url=target)
        for page in crawled
        for target in page.internal_links[:max_links_per_page]
    ]

    hits = Counter(normalize_url(edge.to_url) for edge in edges)
    inbound_counts = {}
    for page in crawled:
        key = normalize_url(page.url)
        inbound_counts[key] = hits.get(key, 0)

    return LinkGraph(edges=edges, inbound_counts=inbound_counts)
