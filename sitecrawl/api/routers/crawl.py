"""Crawl endpoints — stateless wrappers around the scraper and analysis.

Routes
------
POST /crawl/discover    Body: {"url": "https://...", ...}   → discover_pages
POST /crawl/page        Body: {"url": "https://...", ...}   → scrape_page + role + score
POST /crawl/site        Body: {"url": "https://...", ...}   → scrape_site + assess_site
"""

from __future__ import annotations

import re
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field, HttpUrl, field_validator

from sitecrawl.analysis import assess_site, calculate_priority_score, classify_page_role
from sitecrawl.config import settings
from sitecrawl.scraper import discover_pages, scrape_page, scrape_site

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class DiscoverRequest(BaseModel):
    url: HttpUrl
    max_pages: int = Field(default_factory=lambda: settings.default_max_pages, ge=1)
    max_depth: int = Field(default_factory=lambda: settings.default_max_depth, ge=0)
    exclude_patterns: list[str] = Field(default_factory=list)

    @field_validator("exclude_patterns")
    @classmethod
    def _patterns_compile(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid regex {pattern!r}: {exc}") from exc
        return value


class SiteRequest(DiscoverRequest):
    use_reader: bool = True


class PageRequest(BaseModel):
    url: HttpUrl
    use_reader: bool = True


class DiscoverResponse(BaseModel):
    urls: list[str]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/discover", response_model=DiscoverResponse)
def discover_endpoint(body: DiscoverRequest) -> dict[str, Any]:
    """Return the URLs discovery finds from ``body.url``."""
    urls = discover_pages(
        str(body.url), body.max_pages, body.max_depth, body.exclude_patterns
    )
    return {"urls": urls}


@router.post("/page")
def page_endpoint(body: PageRequest) -> dict[str, Any]:
    """Extract one page and attach its role and priority score.

    Failed extractions are returned with ``error`` set and no role, never as
    an HTTP error.
    """
    page = scrape_page(str(body.url), use_reader=body.use_reader)
    payload = page.to_dict()
    if page.failed:
        payload.update(role=None, priority_score=None)
        return payload

    role = classify_page_role(page.url, page)
    payload.update(role=role.value, priority_score=calculate_priority_score(page, role))
    return payload


@router.post("/site")
def site_endpoint(body: SiteRequest) -> dict[str, Any]:
    """Crawl a whole site and return the ranked assessment."""
    pages = scrape_site(
        str(body.url),
        max_pages=body.max_pages,
        max_depth=body.max_depth,
        use_reader=body.use_reader,
        exclude_patterns=body.exclude_patterns,
    )
    return assess_site(pages).to_dict()
