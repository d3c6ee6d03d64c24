"""Port for retrieving raw page bodies."""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class PageFetcherPort(Protocol):
    """Fetches the raw text body of a URL.

    Implementations raise ``NetworkError`` on any transport failure or
    non-success status. They never retry.
    """

    async def fetch(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> str: ...
