"""FastAPI application factory.

Routers
-------
    /crawl   — discovery, single-page extraction and full-site assessment

The API is stateless: every request runs a fresh crawl and nothing is stored.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitecrawl.api.routers import crawl as crawl_router
from sitecrawl.logging_setup import configure_logging


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="Site Crawl API",
        description=(
            "Discovers a site's pages, extracts their content through the "
            "reader service with a local HTML fallback, and classifies and "
            "ranks them by business priority."
        ),
        version="0.1.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(crawl_router.router, prefix="/crawl", tags=["crawl"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn sitecrawl.api.app:app --reload
app = create_app()
