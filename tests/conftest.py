"""Shared fixtures.

Politeness delays are zeroed for every test so crawls run instantly; the
reader base URL is pinned so route mocks do not depend on the environment.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    monkeypatch.setattr("sitecrawl.config.settings.discovery_delay", 0.0)
    monkeypatch.setattr("sitecrawl.config.settings.extraction_delay", 0.0)
    monkeypatch.setattr("sitecrawl.config.settings.reader_base_url", "https://r.jina.ai/")
