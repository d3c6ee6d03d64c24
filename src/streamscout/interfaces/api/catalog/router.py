"""Catalog endpoints: home sliders, search, search history and title pages."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, HTTPException, Query, Request

from streamscout.domain.entities.catalog import title_href
from streamscout.interfaces.api.catalog.presenter import (
    present_entry,
    present_slider,
    present_title_page,
)
from streamscout.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["catalog"])


def _parse_title_ref(title_ref: str) -> tuple[int, str] | None:
    """Split ``"{id}-{slug}"``; the slug itself may contain dashes."""
    raw_id, sep, slug = title_ref.partition("-")
    if not sep or not slug or not raw_id.isdigit():
        return None
    return int(raw_id), slug


@router.get("/catalog/home")
async def catalog_home(request: Request) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    settings = state.settings
    sliders = await state.catalog_uc.home(settings)
    return {"sliders": [present_slider(slider, settings) for slider in sliders]}


@router.get("/catalog/search")
async def catalog_search(
    request: Request,
    q: str = Query(default="", description="Free-text search query."),
) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    settings = state.settings
    entries = await state.catalog_uc.search(q, settings)
    return {
        "query": q.strip(),
        "results": [present_entry(entry, settings) for entry in entries],
    }


@router.get("/catalog/search/history")
async def search_history(request: Request) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    return {"queries": await state.catalog_uc.search_history()}


@router.delete("/catalog/search/history")
async def forget_search(request: Request, q: str = Query(...)) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    removed = await state.catalog_uc.forget_search(q)
    if not removed:
        raise HTTPException(status_code=404, detail=f"Query not in history: {q}")
    return {"removed": q}


@router.get("/titles/{title_ref}")
async def title_page(
    request: Request,
    title_ref: str,
    season: int | None = Query(default=None, ge=1),
) -> dict[str, Any]:
    """Title detail plus the episodes of *season* and their watch progress."""
    state = cast(AppState, request.app.state)
    settings = state.settings

    parsed = _parse_title_ref(title_ref)
    if parsed is None:
        raise HTTPException(status_code=404, detail=f"Invalid title: {title_ref}")
    title_id, slug = parsed

    href = title_href(settings.base_domain, title_id, slug)
    page = await state.catalog_uc.title(href, settings, season=season)
    if page is None:
        raise HTTPException(status_code=404, detail=f"Title not available: {title_ref}")

    group = str(title_id)
    keys = [episode.play_url(settings.base_domain) for episode in page.episodes]
    overall = await state.progress_tracker.load_group(group, keys)

    return present_title_page(
        page,
        settings,
        progress=state.progress_tracker.episode_progress(group),
        overall_progress=overall,
    )
