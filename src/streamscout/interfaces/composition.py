"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from streamscout.application.progress_tracker import ProgressTracker
from streamscout.application.use_cases import CatalogUseCase, PlaybackUseCase
from streamscout.infrastructure.cache import DiskcacheAdapter
from streamscout.infrastructure.config import AppConfig
from streamscout.infrastructure.http import HttpxPageFetcher, build_header_strategy
from streamscout.infrastructure.persistence import (
    CacheProgressRepository,
    CacheSearchHistory,
)
from streamscout.infrastructure.resolution import StreamResolutionChain
from streamscout.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Shared client for all page fetches; User-Agent is set per request."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        follow_redirects=config.http_follow_redirects,
    )


def build_fetcher(config: AppConfig, http_client: httpx.AsyncClient) -> HttpxPageFetcher:
    header_strategy = build_header_strategy(
        config.http_user_agent_mode,
        config.http_user_agents,
        fixed=config.http_user_agent,
    )
    return HttpxPageFetcher(http_client=http_client, header_strategy=header_strategy)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Cache (required by the repositories)
        2. HTTP client + page fetcher
        3. Progress and search-history repositories (use cache)
        4. Resolution chain, progress tracker and use cases
    """
    state = cast(AppState, app.state)
    config = state.config

    # Runtime settings start from the configured site section.
    state.settings = config.site.model_copy()

    # 1) Cache (must be first - other components depend on it)
    cache = DiskcacheAdapter(
        directory=config.cache.directory,
        max_concurrent=config.cache.max_concurrent,
    )
    await cache.__aenter__()
    state.cache = cache
    log.info("cache_initialized", directory=str(config.cache.directory))

    # 2) HTTP client and page fetcher
    state.http_client = build_http_client(config)
    state.fetcher = build_fetcher(config, state.http_client)
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        user_agent_mode=config.http_user_agent_mode,
    )

    # 3) Repositories
    state.progress_store = CacheProgressRepository(
        cache=state.cache,
        ttl_seconds=config.progress_ttl_seconds,
    )
    state.search_history = CacheSearchHistory(
        cache=state.cache,
        max_entries=config.search_history_max_entries,
    )
    log.info(
        "repositories_initialized",
        progress_ttl_days=config.progress_ttl_days,
        search_history_max_entries=config.search_history_max_entries,
    )

    # 4) Application services
    state.chain = StreamResolutionChain(fetcher=state.fetcher)
    state.progress_tracker = ProgressTracker(store=state.progress_store)
    state.catalog_uc = CatalogUseCase(
        fetcher=state.fetcher,
        search_history=state.search_history,
    )
    state.playback_uc = PlaybackUseCase(
        chain=state.chain,
        tracker=state.progress_tracker,
    )

    log.info("app_startup_complete", base_domain=state.settings.base_domain)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        await state.cache.aclose()
        log.info("cache_closed")

        log.info("app_shutdown_complete")
