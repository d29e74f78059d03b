"""Utilities for rendering crawl results in the CLI."""

from __future__ import annotations

from sitecrawl.analysis import SiteAssessment

_ROLE_ICONS = {
    "money": "💰",
    "trust": "🤝",
    "authority": "📚",
    "support": "📄",
}


def _truncate(value: str, width: int) -> str:
    return value if len(value) <= width else value[: width - 1] + "…"


def render_ranking(assessment: SiteAssessment, url_width: int = 60) -> str:
    """Render ranked pages as a fixed-width table followed by a run summary.

    Example::

        #   score  role        in  out  url
        1   180    💰 money     4   25  https://example.com
    """
    lines = [f"{'#':<4}{'score':<7}{'role':<13}{'in':>4}{'out':>5}  url"]
    for item in assessment.ranked:
        role = item.role.value
        lines.append(
            f"{item.rank:<4}{item.priority_score:<7}"
            f"{_ROLE_ICONS.get(role, '📦')} {role:<10}"
            f"{item.internal_links_in:>4}{len(item.page.internal_links):>5}  "
            f"{_truncate(item.page.url, url_width)}"
        )

    lines.append("")
    lines.append(
        f"Pages found: {assessment.pages_found}  "
        f"crawled: {assessment.pages_crawled}  "
        f"failed: {assessment.pages_found - assessment.pages_crawled}"
    )
    orphans = assessment.link_graph.orphans()
    if orphans:
        lines.append(f"Orphan pages ({len(orphans)}):")
        lines.extend(f"  {url}" for url in orphans)
    if assessment.errors:
        lines.append("Errors:")
        lines.extend(f"  {err}" for err in assessment.errors)
    return "\n".join(lines)
