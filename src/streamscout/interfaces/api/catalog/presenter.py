"""JSON presenter for catalog records.

Applies the display toggles of ``SiteSettings`` (original title, cast,
director) and turns filenames into absolute CDN URLs.
"""

from __future__ import annotations

from typing import Any

from streamscout.application.use_cases import TitlePage
from streamscout.domain.entities import CatalogEntry, Episode, Slider, TitleDetail
from streamscout.domain.entities.catalog import cdn_image_url
from streamscout.infrastructure.config import SiteSettings


def present_entry(entry: CatalogEntry, settings: SiteSettings) -> dict[str, Any]:
    base = settings.base_domain
    return {
        "id": entry.id,
        "name": entry.name,
        "slug": entry.slug,
        "href": entry.href(base),
        "image_url": entry.image_url(base),
    }


def present_slider(slider: Slider, settings: SiteSettings) -> dict[str, Any]:
    return {
        "name": slider.name,
        "label": slider.label,
        "titles": [present_entry(entry, settings) for entry in slider.titles],
    }


def present_detail(detail: TitleDetail, settings: SiteSettings) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": detail.id,
        "name": detail.name,
        "plot": detail.plot,
        "runtime": detail.runtime,
        "release_date": detail.release_date,
        "score": detail.score,
        "age_rating": detail.age_rating,
        "quality": detail.quality,
        "genres": list(detail.genres),
        "seasons_count": detail.seasons_count,
        "image_url": cdn_image_url(settings.base_domain, detail.poster_filename),
        "play_url": detail.play_url,
    }
    if settings.show_original_title:
        payload["original_name"] = detail.original_name
    if settings.show_cast:
        payload["main_actors"] = list(detail.main_actors)
    if settings.show_director:
        payload["directors"] = list(detail.directors)
    return payload


def present_episode(
    episode: Episode,
    settings: SiteSettings,
    progress: dict[str, float],
) -> dict[str, Any]:
    base = settings.base_domain
    play_url = episode.play_url(base)
    return {
        "id": episode.id,
        "number": episode.number,
        "name": episode.name,
        "plot": episode.plot,
        "image_url": episode.image_url(base),
        "play_url": play_url,
        "progress": progress.get(play_url, 0.0),
    }


def present_title_page(
    page: TitlePage,
    settings: SiteSettings,
    *,
    progress: dict[str, float] | None = None,
    overall_progress: float = 0.0,
) -> dict[str, Any]:
    progress = progress or {}
    return {
        "title": present_detail(page.detail, settings),
        "season": page.season,
        "episodes": [
            present_episode(episode, settings, progress) for episode in page.episodes
        ],
        "overall_progress": overall_progress,
    }
