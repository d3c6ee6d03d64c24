"""Port for the persisted search history."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SearchHistoryPort(Protocol):
    """Ordered list of past queries, oldest first."""

    async def add(self, query: str) -> None: ...

    async def list(self) -> list[str]: ...

    async def remove(self, query: str) -> bool: ...
