"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from streamscout.infrastructure.config import AppConfig, SiteSettings

if TYPE_CHECKING:
    from streamscout.application.progress_tracker import ProgressTracker
    from streamscout.application.use_cases import CatalogUseCase, PlaybackUseCase
    from streamscout.domain.ports import (
        CachePort,
        PageFetcherPort,
        ProgressStorePort,
        SearchHistoryPort,
    )
    from streamscout.infrastructure.resolution import StreamResolutionChain


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Runtime site settings (seeded from config.site, changed via PATCH /settings)
    settings: SiteSettings

    # Infrastructure
    cache: CachePort
    http_client: httpx.AsyncClient
    fetcher: PageFetcherPort

    # Persistence
    progress_store: ProgressStorePort
    search_history: SearchHistoryPort

    # Application services
    chain: StreamResolutionChain
    progress_tracker: ProgressTracker
    catalog_uc: CatalogUseCase
    playback_uc: PlaybackUseCase
