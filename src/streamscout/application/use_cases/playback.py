"""Playback use case: resolve a stream and attach resume state."""

from __future__ import annotations

import structlog

from streamscout.application.progress_tracker import ProgressTracker
from streamscout.domain.entities.playback import PlaybackSession, StreamResolution
from streamscout.infrastructure.config.schema import SiteSettings
from streamscout.infrastructure.resolution.chain import StreamResolutionChain

log = structlog.get_logger(__name__)


class PlaybackUseCase:
    """Prepares a ``PlaybackSession`` for an external player.

    Resolution errors (``NetworkError``, ``ExtractionError``) propagate to the
    caller, which decides how to report the failing hop.
    """

    def __init__(self, chain: StreamResolutionChain, tracker: ProgressTracker) -> None:
        self._chain = chain
        self._tracker = tracker

    async def start(
        self,
        settings: SiteSettings,
        *,
        play_url: str | None = None,
        detail_url: str | None = None,
        fallback_play_url: str | None = None,
    ) -> PlaybackSession:
        """Resolve *play_url* directly, or run the full chain from *detail_url*.

        The session resumes at the last recorded position, but only when that
        position is past the start of the stream.
        """
        if play_url:
            stream = await self._chain.resolve(play_url, settings)
        elif detail_url:
            stream = await self._chain.resolve_title(
                detail_url, settings, fallback_play_url=fallback_play_url
            )
        else:
            raise ValueError("either play_url or detail_url is required")

        start_position = await self._resume_position(stream)
        log.info(
            "playback_session_started",
            play_url=stream.play_url,
            resume_at=start_position,
        )
        return PlaybackSession(
            stream=stream,
            start_position=start_position,
            hold_speed=settings.hold_speed,
            force_landscape=settings.force_landscape,
        )

    async def _resume_position(self, stream: StreamResolution) -> float | None:
        last = await self._tracker.last_position(stream.play_url)
        if last is None or last <= 0:
            return None
        return last

    async def record_progress(
        self,
        key: str,
        position_seconds: float,
        duration_seconds: float,
        *,
        title_id: int | None = None,
    ) -> bool:
        group = str(title_id) if title_id is not None else None
        return await self._tracker.record(
            key, position_seconds, duration_seconds, group=group
        )
