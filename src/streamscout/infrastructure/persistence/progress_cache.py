"""Playback progress repository backed by CachePort (diskcache)."""

from __future__ import annotations

import json

import structlog

from streamscout.domain.entities.playback import PlaybackProgress
from streamscout.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)


def _serialize_progress(progress: PlaybackProgress) -> str:
    return json.dumps(
        {
            "position_seconds": progress.position_seconds,
            "duration_seconds": progress.duration_seconds,
        }
    )


def _deserialize_progress(data: str) -> PlaybackProgress:
    d = json.loads(data)
    return PlaybackProgress(
        position_seconds=float(d["position_seconds"]),
        duration_seconds=float(d["duration_seconds"]),
    )


class CacheProgressRepository:
    """Stores one progress record per stream key.

    Each write refreshes the record's TTL, so only streams that have not
    been played for ``ttl_seconds`` expire. ``ttl_seconds=0`` keeps records
    forever.
    """

    def __init__(self, cache: CachePort, ttl_seconds: int = 0) -> None:
        self.cache = cache
        self.ttl = ttl_seconds

    @staticmethod
    def _key(stream_key: str) -> str:
        return f"progress:{stream_key}"

    async def save(self, key: str, progress: PlaybackProgress) -> None:
        await self.cache.set(self._key(key), _serialize_progress(progress), ttl=self.ttl)

    async def get(self, key: str) -> PlaybackProgress | None:
        data = await self.cache.get(self._key(key))
        if data is None:
            return None

        try:
            return _deserialize_progress(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("progress_deserialize_error", key=key, error=str(e))
            return None
