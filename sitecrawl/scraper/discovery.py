"""Site discovery: breadth-first traversal of same-site links.

``discover_pages`` walks ``<a href>`` links outward from a start URL, one
level at a time, and returns the visited URLs in visit order.  When the walk
finds almost nothing (typical of a JavaScript-rendered SPA whose links do not
exist in the served HTML) the site's sitemap is used instead.

The queue and the visited set live inside one call and are discarded when it
returns; nothing is shared between crawls.
"""

from __future__ import annotations

import logging
import re
import time
from collections import deque
from typing import Iterable, Union
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from sitecrawl.config import settings
from sitecrawl.scraper.errors import MalformedUrlError, NetworkError
from sitecrawl.scraper.fetcher import DISCOVERY_ACCEPT, get, open_client
from sitecrawl.scraper.links import (
    hostname_of,
    is_skippable,
    is_web_url,
    normalize_host,
    normalize_url,
    resolve_link,
)

logger = logging.getLogger(__name__)

ExcludePattern = Union[str, re.Pattern[str]]

SITEMAP_PATHS = ("/sitemap.xml", "/sitemap_index.xml", "/sitemap/sitemap.xml")

# At or below this many BFS results the site is treated as a probable SPA.
SPA_FALLBACK_THRESHOLD = 3

_STATIC_EXTENSION_RE = re.compile(
    r"\.(pdf|jpg|jpeg|png|gif|css|js|zip|svg|webp|ico|woff|woff2|ttf|eot)$",
    re.IGNORECASE,
)
_SITEMAP_LOC_RE = re.compile(r"<loc>([^<]+)</loc>")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def compile_patterns(patterns: Iterable[ExcludePattern]) -> list[re.Pattern[str]]:
    """Compile string patterns; pass compiled ones through.

    Raises:
        re.error: If a string pattern is not a valid regular expression.
    """
    return [p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns]


def _is_excluded(value: str, patterns: list[re.Pattern[str]]) -> bool:
    return any(p.search(value) for p in patterns)


def _page_links(
    html: str,
    page_url: str,
    base_host: str,
    patterns: list[re.Pattern[str]],
) -> list[str]:
    """Normalized same-site links on a page that survive every filter."""
    soup = BeautifulSoup(html, "html.parser")
    found: list[str] = []
    for anchor in soup.find_all("a", href=True):
        href = anchor.get("href")
        if is_skippable(href):
            continue
        try:
            absolute = resolve_link(href, page_url)
        except MalformedUrlError:
            continue

        if normalize_host(hostname_of(absolute)) != base_host:
            continue
        path = urlparse(absolute).path
        if _STATIC_EXTENSION_RE.search(path) or _is_excluded(path, patterns):
            continue
        normalized = normalize_url(absolute)
        if _is_excluded(normalized, patterns):
            continue
        found.append(normalized)
    return found


def _fetch_links(
    client: httpx.Client,
    url: str,
    base_host: str,
    patterns: list[re.Pattern[str]],
) -> list[str]:
    """Fetch *url* and return its candidate links; ``[]`` on any failure."""
    try:
        response = get(client, url)
    except NetworkError as exc:
        logger.warning("Error fetching %s: %s", url, exc)
        return []

    if not response.is_success:
        logger.info("Non-OK response for %s: %s", url, response.status_code)
        return []

    return _page_links(response.text, url, base_host, patterns)


# ---------------------------------------------------------------------------
# Sitemap fallback
# ---------------------------------------------------------------------------

def fetch_sitemap_urls(start_url: str) -> list[str]:
    """Return same-host ``<loc>`` URLs from the first sitemap that has any.

    Probes ``SITEMAP_PATHS`` in order under the start URL's origin.  Hosts are
    compared exactly here (no ``www.`` folding).  Returns ``[]`` when no
    sitemap answers 2xx with matching URLs.
    """
    parsed = urlparse(start_url)
    origin = f"{parsed.scheme}://{parsed.netloc}"
    base_host = hostname_of(start_url)

    with open_client(settings.sitemap_timeout, accept="application/xml,text/xml,*/*") as client:
        for path in SITEMAP_PATHS:
            sitemap_url = origin + path
            logger.debug("Trying sitemap: %s", sitemap_url)
            try:
                response = get(client, sitemap_url)
            except NetworkError as exc:
                logger.info("Sitemap fetch failed for %s: %s", sitemap_url, exc)
                continue
            if not response.is_success:
                continue

            locs = (loc.strip() for loc in _SITEMAP_LOC_RE.findall(response.text))
            urls = [loc for loc in locs if is_web_url(loc) and hostname_of(loc) == base_host]
            if urls:
                logger.info("Found %d URLs in sitemap: %s", len(urls), sitemap_url)
                return urls

    return []


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def discover_pages(
    start_url: str,
    max_pages: int = 50,
    max_depth: int = 3,
    exclude_patterns: Iterable[ExcludePattern] = (),
) -> list[str]:
    """Discover same-site pages reachable from *start_url*.

    Args:
        start_url: Absolute URL the walk starts from (depth 0).
        max_pages: Upper bound on the number of URLs returned.
        max_depth: Links found at this depth are not followed further.
        exclude_patterns: Regexes (strings or compiled); a link is dropped if
            any of them matches its path or its normalized URL.

    Returns:
        Normalized absolute URLs in breadth-first visit order, at most
        *max_pages* of them, all on the start URL's host (``www.`` ignored).
        Pages that failed to load are still included; they just contributed
        no links.  A start URL matching an exclude pattern is still fetched
        for its links but is not returned.  If the walk found
        ``SPA_FALLBACK_THRESHOLD`` URLs or fewer and a sitemap lists
        same-host URLs, the sitemap's URLs are returned instead.

    Raises:
        ValueError: If *max_pages* or *max_depth* is negative.
        re.error: If a string exclude pattern is not a valid regex.
    """
    if max_pages < 0:
        raise ValueError(f"max_pages must be >= 0, got {max_pages}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    patterns = compile_patterns(exclude_patterns)
    if max_pages == 0:
        return []

    base_host = normalize_host(hostname_of(start_url))
    seed = normalize_url(start_url)
    seed_excluded = _is_excluded(urlparse(start_url).path, patterns) or _is_excluded(seed, patterns)
    # An excluded seed occupies a visit slot but is dropped from the result.
    visit_limit = max_pages + 1 if seed_excluded else max_pages

    discovered: dict[str, None] = {}
    queue: deque[tuple[str, int]] = deque([(seed, 0)])

    logger.info(
        "Starting discovery for %s (max_pages=%d, max_depth=%d)",
        start_url, max_pages, max_depth,
    )

    with open_client(settings.discovery_timeout, accept=DISCOVERY_ACCEPT) as client:
        while queue and len(discovered) < visit_limit:
            url, depth = queue.popleft()
            if url in discovered or depth > max_depth:
                continue
            discovered[url] = None

            logger.debug("Fetching %s (depth=%d)", url, depth)
            new_links = 0
            for link in _fetch_links(client, url, base_host, patterns):
                if link not in discovered:
                    queue.append((link, depth + 1))
                    new_links += 1
            logger.debug("Found %d new links on %s", new_links, url)

            time.sleep(settings.discovery_delay)

    urls = [url for url in discovered if not (seed_excluded and url == seed)]

    if len(urls) <= SPA_FALLBACK_THRESHOLD:
        logger.info(
            "Only found %d pages via HTML links; trying sitemap fallback", len(urls)
        )
        sitemap_urls = fetch_sitemap_urls(start_url)
        if sitemap_urls:
            candidates = (u.rstrip("/") for u in sitemap_urls)
            kept = [u for u in dict.fromkeys(candidates) if not _is_excluded(u, patterns)]
            if kept:
                urls = kept[:max_pages]
                logger.info("Using %d sitemap URLs instead of link discovery", len(urls))

    logger.info("Discovery complete: %d pages", len(urls))
    return urls
