"""Playback endpoints: stream resolution and resume progress."""

from __future__ import annotations

from typing import Any, Optional, cast

import structlog
from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, model_validator

from streamscout.domain.entities import PlaybackSession
from streamscout.domain.exceptions import NetworkError, StreamScoutError
from streamscout.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/playback", tags=["playback"])


class ResolveRequest(BaseModel):
    """Either a play (``/iframe/``) URL or a title detail-page URL."""

    url: Optional[str] = None
    detail_url: Optional[str] = None
    fallback_play_url: Optional[str] = None

    @model_validator(mode="after")
    def _require_target(self) -> "ResolveRequest":
        if not self.url and not self.detail_url:
            raise ValueError("either 'url' or 'detail_url' is required")
        return self


class ProgressRequest(BaseModel):
    key: str = Field(min_length=1, description="Play URL of the stream.")
    position_seconds: float
    duration_seconds: float
    title_id: Optional[int] = None


def _present_session(session: PlaybackSession) -> dict[str, Any]:
    stream = session.stream
    return {
        "stream_url": stream.final_url,
        "headers": stream.headers,
        "play_url": stream.play_url,
        "embed_url": stream.embed_url,
        "expires": stream.expiry,
        "start_position": session.start_position,
        "hold_speed": session.hold_speed,
        "force_landscape": session.force_landscape,
    }


@router.post("/resolve")
async def resolve_stream(request: Request, body: ResolveRequest) -> JSONResponse:
    """Resolve a stream URL the player can open directly.

    Failures answer 502 with the hop that failed (``play_link``, ``embed``,
    ``manifest``) or ``fetch`` for network errors.
    """
    state = cast(AppState, request.app.state)
    try:
        session = await state.playback_uc.start(
            state.settings,
            play_url=body.url,
            detail_url=body.detail_url,
            fallback_play_url=body.fallback_play_url,
        )
    except StreamScoutError as exc:
        hop = "fetch" if isinstance(exc, NetworkError) else getattr(exc, "hop", None)
        log.warning(
            "playback_resolve_failed",
            url=body.url,
            detail_url=body.detail_url,
            hop=hop,
            error=str(exc),
        )
        return JSONResponse(
            status_code=502,
            content={
                "detail": str(exc),
                "hop": hop,
                "field": getattr(exc, "field", None),
            },
        )

    return JSONResponse(content=_present_session(session))


@router.post("/progress")
async def record_progress(request: Request, body: ProgressRequest) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    recorded = await state.playback_uc.record_progress(
        body.key,
        body.position_seconds,
        body.duration_seconds,
        title_id=body.title_id,
    )
    return {"recorded": recorded}


@router.get("/progress")
async def get_progress(request: Request, key: str = Query(...)) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    progress = await state.progress_tracker.get(key)
    if progress is None:
        raise HTTPException(status_code=404, detail=f"No progress for: {key}")
    return {
        "key": key,
        "position_seconds": progress.position_seconds,
        "duration_seconds": progress.duration_seconds,
        "fraction": progress.fraction,
    }


@router.get("/progress/titles/{title_id}")
async def title_progress(request: Request, title_id: int) -> dict[str, Any]:
    """Completion of a title's episodes recorded or loaded by this process."""
    state = cast(AppState, request.app.state)
    group = str(title_id)
    return {
        "title_id": title_id,
        "overall": state.progress_tracker.overall_progress(group),
        "episodes": state.progress_tracker.episode_progress(group),
    }
