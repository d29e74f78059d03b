"""Priority scoring: one non-negative integer per page.

    score = role weight + content bonuses + min(internal links, 20)

The link term is capped so navigation-heavy pages cannot win on outbound link
volume alone.
"""

from __future__ import annotations

from sitecrawl.analysis.roles import Role
from sitecrawl.scraper.models import ExtractedPage

ROLE_WEIGHTS = {
    Role.MONEY: 100,
    Role.TRUST: 50,
}
DEFAULT_ROLE_WEIGHT = 20
LINK_BONUS_CAP = 20


def content_bonus(page: ExtractedPage) -> int:
    """Points for length, an h1, a meta description and at least three h2s."""
    bonus = 0
    if page.word_count > 500:
        bonus += 20
    if page.word_count > 1000:
        bonus += 10
    if page.h1:
        bonus += 10
    if page.meta_description:
        bonus += 10
    if len(page.headings.h2) >= 3:
        bonus += 10
    return bonus


def calculate_priority_score(page: ExtractedPage, role: Role | str) -> int:
    """Return the priority score of *page* under *role* (a ``Role`` or its value).

    Any role other than money or trust, including an unrecognised string,
    gets ``DEFAULT_ROLE_WEIGHT``.
    """
    # Role is a str enum, so "money" and Role.MONEY hit the same key.
    weight = ROLE_WEIGHTS.get(role, DEFAULT_ROLE_WEIGHT)
    link_bonus = min(len(page.internal_links), LINK_BONUS_CAP)
    return weight + content_bonus(page) + link_bonus
