"""Resume support: last position per stream and completion per title."""

from __future__ import annotations

import math
from typing import Iterable

import structlog

from streamscout.domain.entities.playback import PlaybackProgress
from streamscout.domain.ports.progress_store import ProgressStorePort

log = structlog.get_logger(__name__)


class ProgressTracker:
    """Records playback positions, keyed by stream play URL.

    ``record`` is called about once per second by each active player. Keys
    of concurrent sessions differ, so writes need no cross-session lock.

    Episodes of one title can be grouped (group = title id); the title's
    overall completion is the mean fraction of its episodes that have
    recorded progress, recomputed on every record.
    """

    def __init__(self, store: ProgressStorePort) -> None:
        self._store = store
        self._fractions: dict[str, dict[str, float]] = {}
        self._overall: dict[str, float] = {}

    async def record(
        self,
        key: str,
        position_seconds: float,
        duration_seconds: float,
        *,
        group: str | None = None,
    ) -> bool:
        """Store the current position. Returns False when the call is a no-op.

        Unknown durations (zero, negative, NaN, infinite) are reported while
        the player is still buffering and are ignored, as are non-finite
        positions.
        """
        if not math.isfinite(duration_seconds) or duration_seconds <= 0:
            return False
        if not math.isfinite(position_seconds):
            return False

        progress = PlaybackProgress(
            position_seconds=max(position_seconds, 0.0),
            duration_seconds=duration_seconds,
        )
        await self._store.save(key, progress)

        if group is not None:
            self._fractions.setdefault(group, {})[key] = progress.fraction
            self._recompute(group)
        return True

    async def last_position(self, key: str) -> float | None:
        progress = await self._store.get(key)
        return progress.position_seconds if progress is not None else None

    async def get(self, key: str) -> PlaybackProgress | None:
        return await self._store.get(key)

    async def load_group(self, group: str, keys: Iterable[str]) -> float:
        """Seed a group's fractions from the store and return its completion.

        Used when a title page is opened after a restart, before any
        ``record`` call of this process has touched the group.
        """
        fractions = self._fractions.setdefault(group, {})
        for key in keys:
            if key in fractions:
                continue
            progress = await self._store.get(key)
            if progress is not None:
                fractions[key] = progress.fraction
        return self._recompute(group)

    def episode_progress(self, group: str) -> dict[str, float]:
        return dict(self._fractions.get(group, {}))

    def overall_progress(self, group: str) -> float:
        return self._overall.get(group, 0.0)

    def _recompute(self, group: str) -> float:
        fractions = self._fractions.get(group) or {}
        overall = sum(fractions.values()) / len(fractions) if fractions else 0.0
        self._overall[group] = overall
        log.debug(
            "title_progress_updated",
            group=group,
            episodes=len(fractions),
            overall=round(overall, 4),
        )
        return overall
