"""Search history repository backed by CachePort (diskcache)."""

from __future__ import annotations

import asyncio
import json

import structlog

from streamscout.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)

_HISTORY_KEY = "search_history"


class CacheSearchHistory:
    """Ordered, deduplicated list of past queries (oldest first).

    A query that is already present keeps its position. When more than
    ``max_entries`` queries are stored the oldest ones are evicted
    (``max_entries=0`` disables the cap).
    """

    def __init__(self, cache: CachePort, max_entries: int = 0) -> None:
        self.cache = cache
        self.max_entries = max_entries
        # read-modify-write of a single key
        self._lock = asyncio.Lock()

    async def _load(self) -> list[str]:
        data = await self.cache.get(_HISTORY_KEY)
        if data is None:
            return []
        try:
            items = json.loads(data)
        except (json.JSONDecodeError, TypeError) as e:
            log.error("search_history_deserialize_error", error=str(e))
            return []
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, str)]

    async def _store(self, items: list[str]) -> None:
        await self.cache.set(_HISTORY_KEY, json.dumps(items), ttl=0)

    async def add(self, query: str) -> None:
        query = query.strip()
        if not query:
            return
        async with self._lock:
            items = await self._load()
            if query in items:
                return
            items.append(query)
            if self.max_entries and len(items) > self.max_entries:
                evicted = items[: len(items) - self.max_entries]
                items = items[-self.max_entries :]
                log.debug("search_history_evicted", count=len(evicted))
            await self._store(items)

    async def list(self) -> list[str]:
        return await self._load()

    async def remove(self, query: str) -> bool:
        async with self._lock:
            items = await self._load()
            if query not in items:
                return False
            items.remove(query)
            await self._store(items)
            return True
