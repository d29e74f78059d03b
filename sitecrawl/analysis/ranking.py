"""Rank a crawl's pages and summarise the run.

Ties on priority score keep discovery order: the sort is stable and pages
arrive in the order the pipeline returned them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from sitecrawl.analysis.link_graph import LinkGraph, build_link_graph
from sitecrawl.analysis.roles import Role, classify_page_role
from sitecrawl.analysis.scoring import calculate_priority_score
from sitecrawl.scraper.models import ExtractedPage

# Error lines kept on a SiteAssessment.
MAX_REPORTED_ERRORS = 50


@dataclass
class RankedPage:
    page: ExtractedPage
    role: Role
    priority_score: int
    rank: int
    internal_links_in: int = 0

    @property
    def is_orphan(self) -> bool:
        return self.internal_links_in == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "url": self.page.url,
            "title": self.page.title,
            "role": self.role.value,
            "priority_score": self.priority_score,
            "word_count": self.page.word_count,
            "internal_links_out": len(self.page.internal_links),
            "internal_links_in": self.internal_links_in,
            "is_orphan": self.is_orphan,
        }


@dataclass
class SiteAssessment:
    ranked: list[RankedPage] = field(default_factory=list)
    link_graph: LinkGraph = field(default_factory=LinkGraph)
    pages_found: int = 0
    pages_crawled: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pages_found": self.pages_found,
            "pages_crawled": self.pages_crawled,
            "errors": list(self.errors),
            "pages": [r.to_dict() for r in self.ranked],
            "orphans": self.link_graph.orphans(),
        }


def rank_pages(pages: Sequence[ExtractedPage]) -> list[RankedPage]:
    """Classify, score and rank the successfully extracted *pages*.

    Returns:
        Ranked pages, highest score first, with 1-based ``rank``.  Equal scores
        keep their relative input order.
    """
    scored = []
    for page in pages:
        if page.failed:
            continue
        role = classify_page_role(page.url, page)
        scored.append((page, role, calculate_priority_score(page, role)))

    scored.sort(key=lambda item: item[2], reverse=True)
    return [
        RankedPage(page=page, role=role, priority_score=score, rank=position)
        for position, (page, role, score) in enumerate(scored, start=1)
    ]


def assess_site(pages: Sequence[ExtractedPage]) -> SiteAssessment:
    """Rank *pages*, attach inbound link counts and summarise the crawl."""
    graph = build_link_graph(pages)
    ranked = rank_pages(pages)
    for item in ranked:
        item.internal_links_in = graph.inbound(item.page.url)

    errors = [f"{p.url}: {p.error}" for p in pages if p.failed]
    return SiteAssessment(
        ranked=ranked,
        link_graph=graph,
        pages_found=len(pages),
        pages_crawled=len(pages) - len(errors),
        errors=errors[:MAX_REPORTED_ERRORS],
    )
