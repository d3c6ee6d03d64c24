"""Cache Port - interface for the async key-value store behind persisted state."""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """Port for an async key-value cache with TTL support.

    Implementations:
      - DiskcacheAdapter (SQLite-based, no daemon)

    Adapters support async context-manager semantics:
        async with cache:
            await cache.set("key", value)
    """

    async def get(self, key: str) -> Any:
        """Retrieve value. None = not found / expired."""
        ...

    async def set(self, key: str, value: Any, *, ttl: int = 0) -> None:
        """Set value with a TTL in seconds (0 = never expires)."""
        ...

    async def aclose(self) -> None:
        ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
