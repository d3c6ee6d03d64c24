"""Diskcache adapter - SQLite-based store without a daemon process."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import structlog
from diskcache import Cache as DiskCache

log = structlog.get_logger(__name__)


class DiskcacheAdapter:
    """Async wrapper for diskcache.Cache (sync-only library).

    - Uses `asyncio.to_thread` for I/O so the event loop never blocks.
    - A semaphore bounds parallel disk writes (SQLite lock contention).
    - Implements the async context manager protocol.

    Args:
        directory: SQLite DB path.
        max_concurrent: Max parallel disk ops.
    """

    def __init__(
        self,
        directory: str | Path = "./.cache/streamscout",
        max_concurrent: int = 10,
    ) -> None:
        self.directory = Path(directory)
        self._cache: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def __aenter__(self) -> DiskcacheAdapter:
        if self._cache is None:
            self._cache = await asyncio.to_thread(DiskCache, str(self.directory))
            log.info("diskcache_opened", path=str(self.directory))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is not None:
            await asyncio.to_thread(self._cache.close)
            self._cache = None
            log.info("diskcache_closed", directory=str(self.directory))

    def _require_open(self) -> DiskCache:
        if self._cache is None:
            raise RuntimeError(
                "Cache not initialized. Use 'async with cache:' or await cache.__aenter__()"
            )
        return self._cache

    async def get(self, key: str) -> Optional[Any]:
        cache = self._require_open()
        async with self._semaphore:
            value = await asyncio.to_thread(cache.get, key, default=None)
        log.debug("cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any, *, ttl: int = 0) -> None:
        """Write with a TTL in seconds. A TTL of 0 never expires."""
        cache = self._require_open()
        expire = ttl if ttl > 0 else None

        async with self._semaphore:
            await asyncio.to_thread(cache.set, key, value, expire=expire)
        log.debug("cache_set", key=key, ttl=expire)
