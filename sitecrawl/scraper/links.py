"""Link resolution, normalization and internal/external partitioning.

Shared by the discovery crawler and both extraction strategies so that every
component filters and resolves ``href`` values identically.
"""

from __future__ import annotations

from typing import Iterable
from urllib.parse import urljoin, urlparse

from sitecrawl.scraper.errors import MalformedUrlError

_SKIPPED_PREFIXES = ("#", "javascript:", "mailto:", "tel:")
_WEB_SCHEMES = ("http", "https")


def is_skippable(href: str | None) -> bool:
    """Return ``True`` for empty, fragment-only, ``javascript:``, ``mailto:`` and ``tel:`` hrefs."""
    if not href:
        return True
    value = href.strip().lower()
    return not value or value.startswith(_SKIPPED_PREFIXES)


def resolve_link(href: str, base_url: str) -> str:
    """Resolve *href* against *base_url* and return an absolute http(s) URL.

    Raises:
        MalformedUrlError: If the result is not an absolute http(s) URL or
            cannot be parsed (e.g. an invalid port or IPv6 literal).
    """
    try:
        absolute = urljoin(base_url, href.strip())
        parsed = urlparse(absolute)
        hostname = parsed.hostname
        parsed.port  # noqa: B018 - raises ValueError on a bad port
    except ValueError as exc:
        raise MalformedUrlError(f"Cannot resolve {href!r}: {exc}") from exc

    if parsed.scheme.lower() not in _WEB_SCHEMES or not hostname:
        raise MalformedUrlError(f"Not an absolute web URL: {absolute!r}")
    return absolute


def is_web_url(url: str) -> bool:
    """``True`` when *url* is an absolute http(s) URL with a hostname."""
    try:
        parsed = urlparse(url)
        return parsed.scheme.lower() in _WEB_SCHEMES and bool(parsed.hostname)
    except ValueError:
        return False


def hostname_of(url: str) -> str:
    """Lower-cased hostname of *url* (no port), or ``""`` when it has none."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def normalize_host(hostname: str) -> str:
    """Strip a leading ``www.`` so ``www.example.com`` and ``example.com`` compare equal."""
    host = hostname.lower()
    return host[4:] if host.startswith("www.") else host


def normalize_url(url: str) -> str:
    """Drop query and fragment, lower-case scheme and host, strip the trailing slash."""
    parsed = urlparse(url)
    return f"{parsed.scheme.lower()}://{parsed.netloc.lower()}{parsed.path}".rstrip("/")


def dedupe(urls: Iterable[str]) -> list[str]:
    """Remove duplicates while keeping first-seen order."""
    return list(dict.fromkeys(urls))


def partition_links(hrefs: Iterable[str | None], page_url: str) -> tuple[list[str], list[str]]:
    """Split raw *hrefs* found on *page_url* into ``(internal, external)`` URLs.

    Skippable hrefs and links that fail to resolve are dropped silently.  A
    link is internal when its hostname equals the page's hostname exactly.
    Both lists are deduplicated.
    """
    base_host = hostname_of(page_url)
    internal: list[str] = []
    external: list[str] = []
    for href in hrefs:
        if is_skippable(href):
            continue
        try:
            absolute = resolve_link(href, page_url)
        except MalformedUrlError:
            continue
        if hostname_of(absolute) == base_host:
            internal.append(absolute)
        else:
            external.append(absolute)
    return dedupe(internal), dedupe(external)
