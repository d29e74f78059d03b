"""Logging configuration for the CLI and the HTTP API."""

from __future__ import annotations

import logging

from sitecrawl.config import settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _normalise_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.upper()
        if value.isdigit():
            return int(value)
        resolved = logging.getLevelName(value)
        if isinstance(resolved, int):
            return resolved
    return logging.INFO


def configure_logging(level: str | int | None = None) -> None:
    """Install a single stream handler on the root logger.

    Existing root handlers are removed first so repeated calls (e.g. one per
    CLI invocation in tests) do not duplicate output.  *level* defaults to
    ``settings.log_level``.
    """
    log_level = _normalise_level(level if level is not None else settings.log_level)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(level=log_level, format=_FORMAT, handlers=[logging.StreamHandler()])
    # httpx logs every request at INFO; keep crawl output readable.
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
