"""HTTP fetch primitives shared by discovery and extraction.

Every function here speaks ``httpx`` and translates its exceptions into
:class:`~sitecrawl.scraper.errors.NetworkError` so callers only ever handle
scraper error types.  Status codes are *not* checked here; callers decide what
a non-2xx response means for them.
"""

from __future__ import annotations

import httpx

from sitecrawl.config import settings
from sitecrawl.scraper.errors import NetworkError

HTML_ACCEPT = "text/html,application/xhtml+xml"
DISCOVERY_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def browser_headers(accept: str = HTML_ACCEPT) -> dict[str, str]:
    """Request headers that look like a desktop browser."""
    return {
        "User-Agent": settings.browser_user_agent,
        "Accept": accept,
    }


def open_client(timeout: float, accept: str = HTML_ACCEPT) -> httpx.Client:
    """Return a redirect-following client with browser headers.

    The caller owns the client and must close it (use it as a context manager).
    """
    return httpx.Client(
        headers=browser_headers(accept),
        timeout=timeout,
        follow_redirects=True,
    )


def get(client: httpx.Client, url: str, **kwargs) -> httpx.Response:
    """``client.get(url)`` with transport errors translated.

    Raises:
        NetworkError: On timeout, connection failure or an invalid request URL.
    """
    try:
        return client.get(url, **kwargs)
    except httpx.TimeoutException as exc:
        raise NetworkError(f"Timed out fetching {url}") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise NetworkError(f"Failed to fetch {url}: {exc}") from exc


def fetch_url(url: str, timeout: float, accept: str = HTML_ACCEPT) -> httpx.Response:
    """One-shot fetch of *url* with its own short-lived client."""
    with open_client(timeout, accept) as client:
        return get(client, url)
