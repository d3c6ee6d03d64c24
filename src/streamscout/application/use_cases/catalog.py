"""Catalog use case: home sliders, search and title pages."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar
from urllib.parse import quote_plus

import structlog

from streamscout.domain.entities.catalog import (
    CatalogEntry,
    Episode,
    Slider,
    TitleDetail,
)
from streamscout.domain.exceptions import StreamScoutError
from streamscout.domain.ports.page_fetcher import PageFetcherPort
from streamscout.domain.ports.search_history import SearchHistoryPort
from streamscout.infrastructure.config.schema import SiteSettings
from streamscout.infrastructure.scraping.catalog_mapper import (
    to_catalog_entries,
    to_episodes,
    to_sliders,
    to_title_detail,
)
from streamscout.infrastructure.scraping.page_props import extract_app_props

log = structlog.get_logger(__name__)

T = TypeVar("T")


def home_url(base_domain: str) -> str:
    return f"https://{base_domain}/it"


def search_url(base_domain: str, query: str) -> str:
    return f"https://{base_domain}/it/archive?search={quote_plus(query)}"


def season_url(href: str, season: int | None) -> str:
    """Detail page URL, optionally of a specific season."""
    href = href.rstrip("/")
    return f"{href}/stagione-{season}" if season else href


@dataclass(frozen=True)
class TitlePage:
    """A detail page: the title plus the episodes of the loaded season."""

    detail: TitleDetail
    episodes: list[Episode] = field(default_factory=list)
    season: int | None = None


class CatalogUseCase:
    """Browses the site through its embedded page props.

    Fetch and parse happen off the caller's path (network await, parsing
    in a worker thread); results are applied to shared state, such as the
    search history, only back on the event loop. Every pipeline error is
    recovered here and degrades to an empty result.
    """

    def __init__(
        self,
        fetcher: PageFetcherPort,
        search_history: SearchHistoryPort | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._history = search_history

    async def _load(self, url: str, mapper: Callable[[dict[str, Any]], T]) -> T:
        html = await self._fetcher.fetch(url)

        def parse() -> T:
            return mapper(extract_app_props(html))

        return await asyncio.to_thread(parse)

    async def home(self, settings: SiteSettings) -> list[Slider]:
        url = home_url(settings.base_domain)
        try:
            return await self._load(url, to_sliders)
        except StreamScoutError:
            log.warning("catalog_home_error", url=url, exc_info=True)
            return []

    async def search(self, query: str, settings: SiteSettings) -> list[CatalogEntry]:
        """Search the archive. Successful searches are added to the history."""
        query = query.strip()
        if not query:
            return []

        url = search_url(settings.base_domain, query)
        try:
            entries = await self._load(url, to_catalog_entries)
        except StreamScoutError:
            log.warning("catalog_search_error", query=query, url=url, exc_info=True)
            return []

        if self._history is not None:
            await self._history.add(query)
        log.info("catalog_search", query=query, results=len(entries))
        return entries

    async def title(
        self,
        href: str,
        settings: SiteSettings,
        *,
        season: int | None = None,
    ) -> TitlePage | None:
        """Load a title's detail page (and the given season's episodes)."""
        url = season_url(href, season)

        def mapper(payload: dict[str, Any]) -> TitlePage:
            return TitlePage(
                detail=to_title_detail(payload, settings.base_domain),
                episodes=to_episodes(payload),
                season=season,
            )

        try:
            return await self._load(url, mapper)
        except StreamScoutError:
            log.warning("catalog_title_error", url=url, exc_info=True)
            return None

    async def search_history(self) -> list[str]:
        if self._history is None:
            return []
        return await self._history.list()

    async def forget_search(self, query: str) -> bool:
        if self._history is None:
            return False
        return await self._history.remove(query)
