from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request

from streamscout import __version__
from streamscout.infrastructure.config import AppConfig
from streamscout.interfaces.app_state import AppState
from streamscout.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def build_app(config: AppConfig) -> FastAPI:
    """Build the FastAPI app from an already loaded config.

    Only configuration is stored here; resources (HTTP client, cache,
    use cases) are created in lifespan().
    """
    app = FastAPI(
        title="streamscout",
        description="Catalog browsing and stream resolution for a streaming site",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from streamscout.interfaces.api.catalog.router import router as catalog_router
    from streamscout.interfaces.api.playback.router import router as playback_router
    from streamscout.interfaces.api.settings.router import router as settings_router

    app.include_router(catalog_router)
    app.include_router(playback_router)
    app.include_router(settings_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
