from .catalog import CatalogEntry, Episode, Slider, TitleDetail
from .playback import (
    PLAYER_USER_AGENT,
    PlaybackProgress,
    PlaybackSession,
    ResolutionState,
    StreamResolution,
)

__all__ = [
    "PLAYER_USER_AGENT",
    "CatalogEntry",
    "Episode",
    "PlaybackProgress",
    "PlaybackSession",
    "ResolutionState",
    "Slider",
    "StreamResolution",
    "TitleDetail",
]
