"""Port for playback progress persistence."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from streamscout.domain.entities.playback import PlaybackProgress


@runtime_checkable
class ProgressStorePort(Protocol):
    """Async keyed store of playback progress (key = stream play URL)."""

    async def save(self, key: str, progress: PlaybackProgress) -> None: ...

    async def get(self, key: str) -> PlaybackProgress | None: ...
