"""Pipeline exceptions.

All three concrete errors are recovered at the boundary of the operation
that triggered them (one record skipped, one resolution aborted).
"""

from __future__ import annotations


class StreamScoutError(Exception):
    """Base class for all scraping/resolution errors."""


class NetworkError(StreamScoutError):
    """Raised when a page could not be fetched (offline, DNS, timeout, HTTP status)."""

    def __init__(self, url: str, cause: BaseException | str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"fetch failed for {url}: {cause}")


class ParseError(StreamScoutError):
    """Raised when HTML/JSON is structurally not what the site normally serves."""


class ExtractionError(StreamScoutError):
    """Raised when an expected element or pattern is absent at a named hop."""

    def __init__(self, hop: str, message: str, *, field: str | None = None) -> None:
        self.hop = hop
        self.field = field
        super().__init__(f"[{hop}] {message}")
