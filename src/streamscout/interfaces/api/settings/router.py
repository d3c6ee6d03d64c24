"""Runtime site settings."""

from __future__ import annotations

from typing import Any, Optional, cast

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ValidationError

from streamscout.infrastructure.config import SiteSettings
from streamscout.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


class SettingsPatch(BaseModel):
    base_domain: Optional[str] = None
    patch_stream: Optional[bool] = None
    hold_speed: Optional[float] = None
    show_original_title: Optional[bool] = None
    show_cast: Optional[bool] = None
    show_director: Optional[bool] = None
    force_landscape: Optional[bool] = None


@router.get("")
async def get_settings(request: Request) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    return state.settings.model_dump()


@router.patch("")
async def update_settings(request: Request, body: SettingsPatch) -> dict[str, Any]:
    """Apply a partial update; the result is validated as a whole.

    In-flight requests keep the settings object they started with.
    """
    state = cast(AppState, request.app.state)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        updated = SiteSettings.model_validate(
            {**state.settings.model_dump(), **changes}
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc

    state.settings = updated
    log.info("site_settings_updated", changed=sorted(changes))
    return updated.model_dump()
