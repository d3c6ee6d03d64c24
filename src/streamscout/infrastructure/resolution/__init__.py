"""Stream resolution chain."""

from .chain import (
    HOP_EMBED,
    HOP_MANIFEST,
    HOP_PLAY_LINK,
    StreamResolutionChain,
    assemble_stream_url,
    parse_manifest,
)

__all__ = [
    "HOP_EMBED",
    "HOP_MANIFEST",
    "HOP_PLAY_LINK",
    "StreamResolutionChain",
    "assemble_stream_url",
    "parse_manifest",
]
