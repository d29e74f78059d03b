"""Analysis package — role classification, priority scoring, link graph and ranking."""

from sitecrawl.analysis.link_graph import LinkEdge, LinkGraph, build_link_graph
from sitecrawl.analysis.ranking import RankedPage, SiteAssessment, assess_site, rank_pages
from sitecrawl.analysis.roles import Role, classify_page_role
from sitecrawl.analysis.scoring import calculate_priority_score

__all__ = [
    "Role",
    "classify_page_role",
    "calculate_priority_score",
    "LinkEdge",
    "LinkGraph",
    "build_link_graph",
    "RankedPage",
    "SiteAssessment",
    "rank_pages",
    "assess_site",
]
