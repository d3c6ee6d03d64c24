"""Playback value objects: resolved streams and resume progress."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

# Sent by the player for playlist and segment requests.
PLAYER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:135.0) "
    "Gecko/20100101 Firefox/135.0"
)


class ResolutionState(str, Enum):
    """States of one run of the stream resolution chain."""

    START = "start"
    PLAY_LINK_RESOLVED = "play_link_resolved"
    EMBED_RESOLVED = "embed_resolved"
    MANIFEST_FOUND = "manifest_found"
    ASSEMBLED = "assembled"
    FAILED = "failed"


@dataclass(frozen=True)
class StreamResolution:
    """Result of one resolution attempt. Consumed immediately, never persisted."""

    playlist_base_url: str
    token: str
    expiry: str
    final_url: str
    embed_url: str = ""
    play_url: str = ""

    @property
    def headers(self) -> dict[str, str]:
        """Request headers the player must send for the playlist."""
        headers = {"User-Agent": PLAYER_USER_AGENT}
        if self.embed_url:
            headers["Referer"] = self.embed_url
        return headers


@dataclass(frozen=True)
class PlaybackProgress:
    """Last known position of a stream, keyed by its play URL."""

    position_seconds: float
    duration_seconds: float

    @property
    def fraction(self) -> float:
        if not math.isfinite(self.duration_seconds) or self.duration_seconds <= 0:
            return 0.0
        return min(max(self.position_seconds / self.duration_seconds, 0.0), 1.0)


@dataclass(frozen=True)
class PlaybackSession:
    """Everything an external player surface needs to start playback."""

    stream: StreamResolution
    start_position: float | None = None
    hold_speed: float = 0.5
    force_landscape: bool = False

    @property
    def progress_key(self) -> str:
        """Key under which this session's progress is recorded."""
        return self.stream.play_url
