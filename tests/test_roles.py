"""Tests for page role classification."""

from __future__ import annotations

import pytest

from sitecrawl.analysis.roles import ROLE_RULES, Role, classify_page_role, matching_rule
from sitecrawl.scraper.models import ExtractedPage


def _page(url: str = "https://example.com/x", *, title: str | None = None, text: str = "") -> ExtractedPage:
    return ExtractedPage(url=url, status_code=200, title=title, cleaned_text=text, word_count=len(text.split()))


class TestOrderedRules:
    def test_home_page_is_money_regardless_of_content(self) -> None:
        page = _page(title="Our blog", text="Read the complete guide and meet the team.")
        assert classify_page_role("/", page) == Role.MONEY
        assert classify_page_role("https://example.com/", page) == Role.MONEY
        assert classify_page_role("https://example.com", page) == Role.MONEY

    def test_about_page_is_trust(self) -> None:
        assert classify_page_role("/about-us", _page(title="About Our Team")) == Role.TRUST

    def test_blog_pricing_post_is_not_money(self) -> None:
        page = _page(title="5 tips", text="Some thoughts on pricing your work.")
        assert classify_page_role("/blog/5-tips-for-pricing", page) == Role.SUPPORT
        assert matching_rule("/blog/5-tips-for-pricing", page).name == "support-path"

    def test_property_detail_page_is_money(self) -> None:
        assert classify_page_role("/properties/123-oak-street", _page()) == Role.MONEY

    def test_deep_slug_heuristic(self) -> None:
        url = "/catalog/widgets/blue-widget-9000"
        assert classify_page_role(url, _page()) == Role.MONEY
        assert matching_rule(url, _page()).name == "deep-detail-slug"

    def test_shallow_unmatched_page_defaults_to_support(self) -> None:
        assert classify_page_role("/misc/thing", _page()) == Role.SUPPORT
        assert matching_rule("/misc/thing", _page()) is None

    def test_deep_path_without_slug_or_id_defaults_to_support(self) -> None:
        assert classify_page_role("/misc/odds/ends", _page()) == Role.SUPPORT


class TestContentSignals:
    def test_transactional_text_outside_editorial_is_money(self) -> None:
        page = _page(text="Call today to get a quote.")
        assert classify_page_role("/lawn-care", page) == Role.MONEY

    @pytest.mark.parametrize("path", ["/news/launch", "/article/x", "/blog/y"])
    def test_transactional_text_in_editorial_section_is_not_money(self, path: str) -> None:
        page = _page(text="Book now for the best price.")
        assert classify_page_role(path, page) == Role.SUPPORT

    def test_title_counts_as_content(self) -> None:
        assert classify_page_role("/lawn-care", _page(title="Pricing")) == Role.MONEY

    def test_trust_content_still_applies_in_editorial_sections(self) -> None:
        page = _page(text="Read this case study from a happy customer.")
        assert classify_page_role("/blog/a-story", page) == Role.TRUST

    def test_authority_by_content(self) -> None:
        page = _page(text="A step by step walkthrough.")
        assert classify_page_role("/lawn-care", page) == Role.AUTHORITY

    def test_matching_is_case_insensitive(self) -> None:
        assert classify_page_role("/ABOUT", _page()) == Role.TRUST
        assert classify_page_role("/lawn-care", _page(text="BOOK NOW")) == Role.MONEY


class TestPathRules:
    @pytest.mark.parametrize(
        "path, role",
        [
            ("/services/drains", Role.MONEY),
            ("/contact", Role.MONEY),
            ("/team", Role.TRUST),
            ("/testimonials", Role.TRUST),
            ("/guides/choosing-a-boiler", Role.AUTHORITY),
            ("/resources", Role.AUTHORITY),
            ("/faq", Role.SUPPORT),
            ("/privacy-policy", Role.SUPPORT),
            ("/careers", Role.SUPPORT),
        ],
    )
    def test_path_patterns(self, path: str, role: Role) -> None:
        assert classify_page_role(path, _page()) == role

    def test_money_path_beats_trust_content(self) -> None:
        page = _page(text="Meet the team behind our award winning service.")
        assert classify_page_role("/pricing", page) == Role.MONEY


class TestDeterminism:
    def test_same_input_same_role(self) -> None:
        page = _page(title="Guide", text="The ultimate guide to drains.")
        roles = {classify_page_role("/lawn-care", page) for _ in range(5)}
        assert roles == {Role.AUTHORITY}

    def test_rule_order(self) -> None:
        assert [rule.name for rule in ROLE_RULES] == [
            "money-path",
            "money-content",
            "trust-path",
            "trust-content",
            "authority-path",
            "authority-content",
            "support-path",
            "deep-detail-slug",
        ]

    def test_role_values(self) -> None:
        assert {r.value for r in Role} == {"money", "trust", "authority", "support"}
        assert Role("trust") is Role.TRUST
