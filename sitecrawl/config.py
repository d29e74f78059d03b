"""Centralised settings for the site crawler.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Remote reader service
    # ------------------------------------------------------------------
    reader_base_url: str = field(
        default_factory=lambda: os.environ.get("READER_BASE_URL", "https://r.jina.ai/")
    )
    reader_timeout: float = field(
        default_factory=lambda: float(os.environ.get("READER_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Direct page fetches
    # ------------------------------------------------------------------
    page_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_TIMEOUT", "30.0"))
    )
    discovery_timeout: float = field(
        default_factory=lambda: float(os.environ.get("DISCOVERY_TIMEOUT", "15.0"))
    )
    sitemap_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SITEMAP_TIMEOUT", "10.0"))
    )
    browser_user_agent: str = field(
        default_factory=lambda: os.environ.get("BROWSER_USER_AGENT", _DEFAULT_BROWSER_UA)
    )

    # ------------------------------------------------------------------
    # Politeness delays (seconds)
    # ------------------------------------------------------------------
    discovery_delay: float = field(
        default_factory=lambda: float(os.environ.get("DISCOVERY_DELAY", "0.2"))
    )
    extraction_delay: float = field(
        default_factory=lambda: float(os.environ.get("EXTRACTION_DELAY", "0.5"))
    )

    # ------------------------------------------------------------------
    # Crawl limits
    # ------------------------------------------------------------------
    default_max_pages: int = field(
        default_factory=lambda: int(os.environ.get("CRAWL_MAX_PAGES", "50"))
    )
    default_max_depth: int = field(
        default_factory=lambda: int(os.environ.get("CRAWL_MAX_DEPTH", "3"))
    )
    max_text_chars: int = field(
        default_factory=lambda: int(os.environ.get("MAX_TEXT_CHARS", "50000"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )


# Module-level singleton; import this everywhere:
#   from sitecrawl.config import settings
settings = Settings()
