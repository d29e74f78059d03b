"""Page role classification.

Every page gets exactly one business role:

    money      revenue-generating, high-intent pages (services, pricing, booking, contact)
    trust      credibility and social proof (about, team, reviews, case studies)
    authority  guides, pillar content, comparisons, research
    support    blog posts, FAQs, policies and other minor content

Classification is an ordered decision list, not a vote.  Rules are evaluated
top to bottom and the first one that matches decides the role, so a page that
looks like several things at once (a "pricing guide" blog post, say) is
resolved purely by rule order.  Reordering ``ROLE_RULES`` changes results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from urllib.parse import urlparse

from sitecrawl.scraper.models import ExtractedPage


class Role(str, Enum):
    MONEY = "money"
    TRUST = "trust"
    AUTHORITY = "authority"
    SUPPORT = "support"


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------

MONEY_PATH_PATTERNS = [
    re.compile(r"^/?$"),
    re.compile(r"/(services?|pricing|products?|shop|store|buy|order)"),
    re.compile(r"/(book|booking|schedule|appointment|reserve)"),
    re.compile(r"/(quote|estimate|consultation|assessment)"),
    re.compile(r"/(contact|contact-us|get-in-touch|reach-us)"),
    re.compile(r"/(hire|work-with|get-started|start)"),
    re.compile(r"/(plans?|packages?|solutions?)"),
    re.compile(r"/(property|properties|listing|for-sale|for-rent)"),
    re.compile(r"/(menu|order-online|delivery)"),
]

MONEY_CONTENT_SIGNALS = [
    "get a quote", "book now", "schedule", "contact us", "request a call",
    "pricing", "starting from", "free consultation", "our services",
    "how much", "cost", "price", "buy now", "order now", "add to cart",
    "for sale", "for rent", "view property", "enquire now",
]

# Editorial sections where transactional wording does not make a money page.
EDITORIAL_PATH_MARKERS = ("/blog", "/news", "/article")

TRUST_PATH_PATTERNS = [
    re.compile(r"/(about|about-us|our-story|who-we-are)"),
    re.compile(r"/(team|our-team|people|staff|agents?)"),
    re.compile(r"/(testimonials?|reviews?|feedback|what-clients-say)"),
    re.compile(r"/(case-stud|portfolio|projects?|work|our-work)"),
    re.compile(r"/(clients?|partners?|trusted-by)"),
    re.compile(r"/(awards?|certifications?|credentials|accreditation)"),
    re.compile(r"/(guarantee|warranty|promise)"),
    re.compile(r"/(offices?|locations?|branches?|showrooms?)"),
]

TRUST_CONTENT_SIGNALS = [
    "our story", "meet the team", "years of experience", "testimonial",
    "case study", "our clients", "client results", "certified", "award",
    "about us", "who we are", "our mission", "our values",
]

AUTHORITY_PATH_PATTERNS = [
    re.compile(r"/(guide|guides|how-to|tutorial)"),
    re.compile(r"/(comparison|vs|versus|compare)"),
    re.compile(r"/(resource|resources|learn|education)"),
    re.compile(r"/(pillar|ultimate|complete|comprehensive)"),
    re.compile(r"/(research|study|report|whitepaper)"),
    re.compile(r"/(area-guide|neighbourhood|neighborhood|market-report)"),
]

AUTHORITY_CONTENT_SIGNALS = [
    "complete guide", "ultimate guide", "everything you need to know",
    "step by step", "comprehensive", "in-depth", "definitive",
]

SUPPORT_PATH_PATTERNS = [
    re.compile(r"/(blog|news|articles?|posts?)"),
    re.compile(r"/(faq|faqs|questions|help)"),
    re.compile(r"/(privacy|terms|legal|disclaimer|policy|policies)"),
    re.compile(r"/(sitemap|accessibility|cookie)"),
    re.compile(r"/(career|jobs|vacancies)"),
    re.compile(r"/(press|media|newsroom)"),
]

_NUMERIC_SEGMENT_RE = re.compile(r"/\d+")


# ---------------------------------------------------------------------------
# Rule machinery
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PageSignals:
    """Lower-cased inputs every rule predicate reads."""

    path: str
    text: str

    @classmethod
    def from_page(cls, url: str, page: ExtractedPage) -> PageSignals:
        path = urlparse(url).path.lower()
        text = f"{page.cleaned_text or ''} {page.title or ''}".lower()
        return cls(path=path, text=text)


@dataclass(frozen=True)
class RoleRule:
    name: str
    predicate: Callable[[PageSignals], bool]
    role: Role


def _path_matches(patterns: list[re.Pattern[str]]) -> Callable[[PageSignals], bool]:
    return lambda s: any(p.search(s.path) for p in patterns)


def _text_mentions(signals: list[str]) -> Callable[[PageSignals], bool]:
    return lambda s: any(signal in s.text for signal in signals)


def _transactional_outside_editorial(s: PageSignals) -> bool:
    if any(marker in s.path for marker in EDITORIAL_PATH_MARKERS):
        return False
    return any(signal in s.text for signal in MONEY_CONTENT_SIGNALS)


def _deep_detail_slug(s: PageSignals) -> bool:
    """Deep paths with a hyphenated slug or numeric id, e.g. ``/properties/area/12-oak-st``."""
    depth = len([segment for segment in s.path.split("/") if segment])
    return depth > 2 and ("-" in s.path or bool(_NUMERIC_SEGMENT_RE.search(s.path)))


ROLE_RULES: tuple[RoleRule, ...] = (
    RoleRule("money-path", _path_matches(MONEY_PATH_PATTERNS), Role.MONEY),
    RoleRule("money-content", _transactional_outside_editorial, Role.MONEY),
    RoleRule("trust-path", _path_matches(TRUST_PATH_PATTERNS), Role.TRUST),
    # Only money-content skips editorial paths; trust/authority content do not.
    RoleRule("trust-content", _text_mentions(TRUST_CONTENT_SIGNALS), Role.TRUST),
    RoleRule("authority-path", _path_matches(AUTHORITY_PATH_PATTERNS), Role.AUTHORITY),
    RoleRule("authority-content", _text_mentions(AUTHORITY_CONTENT_SIGNALS), Role.AUTHORITY),
    RoleRule("support-path", _path_matches(SUPPORT_PATH_PATTERNS), Role.SUPPORT),
    RoleRule("deep-detail-slug", _deep_detail_slug, Role.MONEY),
)

DEFAULT_ROLE = Role.SUPPORT


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def matching_rule(url: str, page: ExtractedPage) -> RoleRule | None:
    """Return the first rule that fires for *page*, or ``None`` for the default."""
    signals = PageSignals.from_page(url, page)
    for rule in ROLE_RULES:
        if rule.predicate(signals):
            return rule
    return None


def classify_page_role(url: str, page: ExtractedPage) -> Role:
    """Assign *page* one of the four roles.

    *url* may be absolute or a bare path (``"/about-us"``).  The function is
    pure: identical inputs always give the identical role.
    """
    rule = matching_rule(url, page)
    return rule.role if rule is not None else DEFAULT_ROLE
