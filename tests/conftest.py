"""Shared test fixtures for the streamscout test suite."""

from __future__ import annotations

import html
import json
from typing import Any
from unittest.mock import AsyncMock

import pytest

from streamscout.infrastructure.config import SiteSettings

BASE_DOMAIN = "sc.example"


# ---------------------------------------------------------------------------
# Page builders
# ---------------------------------------------------------------------------


def app_page(props: dict[str, Any], **extra: Any) -> str:
    """Render a page the way the site does: props JSON in ``#app[data-page]``."""
    payload = {"component": "Page", "props": props, **extra}
    attr = html.escape(json.dumps(payload), quote=True)
    return f'<html><body><div id="app" data-page="{attr}"></div></body></html>'


def raw_title(
    title_id: int = 1,
    *,
    name: str = "Iron Man",
    slug: str = "iron-man",
    poster: str | None = "poster.jpg",
) -> dict[str, Any]:
    images: list[dict[str, Any]] = [{"type": "cover", "filename": "cover.jpg"}]
    if poster is not None:
        images.append({"type": "poster", "filename": poster})
    return {"id": title_id, "name": name, "slug": slug, "images": images}


@pytest.fixture()
def make_page():
    return app_page


@pytest.fixture()
def make_title():
    return raw_title


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings() -> SiteSettings:
    return SiteSettings(base_domain=BASE_DOMAIN)


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


class FakeCache:
    """Dict-backed CachePort; records the TTL of every write."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str) -> Any:
        return self.data.get(key)

    async def set(self, key: str, value: Any, *, ttl: int = 0) -> None:
        self.data[key] = value
        self.ttls[key] = ttl

    async def aclose(self) -> None:
        return None


@pytest.fixture()
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture()
def mock_cache() -> AsyncMock:
    """Mock CachePort."""
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.aclose = AsyncMock()
    return cache


@pytest.fixture()
def mock_fetcher() -> AsyncMock:
    """Mock PageFetcherPort."""
    fetcher = AsyncMock()
    fetcher.fetch = AsyncMock(return_value="")
    return fetcher
