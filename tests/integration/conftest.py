"""Shared fixtures for integration tests.

These tests use real infrastructure components (DiskcacheAdapter,
HttpxPageFetcher, StreamResolutionChain) with mocked HTTP via respx.
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import httpx
import pytest

from streamscout.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from streamscout.infrastructure.http import HttpxPageFetcher, fixed_user_agent


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
def fetcher(http_client: httpx.AsyncClient) -> HttpxPageFetcher:
    return HttpxPageFetcher(
        http_client=http_client,
        header_strategy=fixed_user_agent("IntegrationAgent/1.0"),
    )


@pytest.fixture()
async def diskcache(tmp_path: Path) -> AsyncIterator[DiskcacheAdapter]:
    """Real DiskcacheAdapter backed by tmp_path (auto-cleaned)."""
    adapter = DiskcacheAdapter(
        directory=tmp_path / "cache",
        max_concurrent=5,
    )
    async with adapter:
        yield adapter
