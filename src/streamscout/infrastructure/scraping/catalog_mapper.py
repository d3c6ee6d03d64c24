"""Mapping of decoded page props to typed catalog records.

Field reads are permissive: a field with the wrong type takes its default.
Only the identifying fields are mandatory, and a record missing one of them
is dropped on its own; the rest of the batch is kept.

Known shapes::

    props.titles[]                  search results
    props.sliders[].titles[]        home-page carousels
    props.title                     detail page
    props.loadedSeason.episodes[]   episodes of the selected season
"""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from streamscout.domain.entities.catalog import (
    CatalogEntry,
    Episode,
    Slider,
    TitleDetail,
    title_play_url,
)
from streamscout.domain.exceptions import ParseError
from streamscout.infrastructure.common.converters import (
    as_display_str,
    as_int,
    as_list,
    as_mapping,
    as_str,
    names_of,
)

log = structlog.get_logger(__name__)

POSTER_IMAGE_TYPE = "poster"


def _props(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    props = as_mapping(payload.get("props"))
    if props is None:
        raise ParseError("page payload has no 'props' object")
    return props


def _poster_filename(images: Any) -> str | None:
    """Filename of the first image variant typed ``poster``, if any."""
    for image in as_list(images):
        mapping = as_mapping(image)
        if mapping is None or mapping.get("type") != POSTER_IMAGE_TYPE:
            continue
        filename = mapping.get("filename")
        return filename if isinstance(filename, str) and filename else None
    return None


def _first_filename(images: Any) -> str | None:
    for image in as_list(images):
        mapping = as_mapping(image)
        if mapping is None:
            continue
        filename = mapping.get("filename")
        if isinstance(filename, str) and filename:
            return filename
        return None
    return None


def _catalog_entry(raw: Any) -> CatalogEntry | None:
    data = as_mapping(raw)
    if data is None:
        return None

    name = as_str(data.get("name"))
    title_id = as_int(data.get("id"))
    slug = as_str(data.get("slug"))
    poster = _poster_filename(data.get("images"))

    if not name or title_id is None or not slug or poster is None:
        log.debug(
            "catalog_entry_dropped",
            id=data.get("id"),
            has_name=bool(name),
            has_slug=bool(slug),
            has_poster=poster is not None,
        )
        return None

    return CatalogEntry(name=name, id=title_id, slug=slug, poster_filename=poster)


def _entries(raw_titles: Any) -> list[CatalogEntry]:
    entries = [_catalog_entry(raw) for raw in as_list(raw_titles)]
    return [entry for entry in entries if entry is not None]


def to_catalog_entries(payload: Mapping[str, Any]) -> list[CatalogEntry]:
    """Map ``props.titles[]`` (search/archive pages)."""
    props = _props(payload)
    raw_titles = as_list(props.get("titles"))
    entries = _entries(raw_titles)
    log.debug("catalog_entries_mapped", total=len(raw_titles), kept=len(entries))
    return entries


def to_sliders(payload: Mapping[str, Any]) -> list[Slider]:
    """Map ``props.sliders[]`` (home page); slider titles follow catalog rules."""
    props = _props(payload)
    sliders: list[Slider] = []
    for raw in as_list(props.get("sliders")):
        data = as_mapping(raw)
        if data is None:
            continue
        sliders.append(
            Slider(
                name=as_str(data.get("name")),
                label=as_str(data.get("label")),
                titles=tuple(_entries(data.get("titles"))),
            )
        )
    return sliders


def to_title_detail(payload: Mapping[str, Any], base_domain: str) -> TitleDetail:
    """Map ``props.title`` (detail page).

    ``play_url`` is filled in only when the title carries an integer id.

    Raises:
        ParseError: no ``props`` or no ``props.title`` object.
    """
    props = _props(payload)
    data = as_mapping(props.get("title"))
    if data is None:
        raise ParseError("page props have no 'title' object")

    title_id = as_int(data.get("id"))
    return TitleDetail(
        id=title_id or 0,
        name=as_str(data.get("name")),
        original_name=as_str(data.get("original_name")),
        plot=as_str(data.get("plot")),
        runtime=as_int(data.get("runtime")) or 0,
        release_date=as_str(data.get("release_date")),
        score=as_display_str(data.get("score")),
        age_rating=as_display_str(data.get("age")),
        quality=as_str(data.get("quality")),
        genres=tuple(names_of(data.get("genres"))),
        main_actors=tuple(names_of(data.get("main_actors"))),
        directors=tuple(names_of(data.get("main_directors"))),
        seasons_count=as_int(data.get("seasons_count")) or 0,
        poster_filename=_poster_filename(data.get("images")) or "",
        play_url=title_play_url(base_domain, title_id) if title_id is not None else None,
    )


def _episode(raw: Any, title_id: int) -> Episode | None:
    data = as_mapping(raw)
    if data is None:
        return None

    episode_id = as_int(data.get("id"))
    name = as_str(data.get("name"))
    number = as_int(data.get("number"))
    if episode_id is None or not name or number is None:
        log.debug("episode_dropped", id=data.get("id"), number=data.get("number"))
        return None

    images = data.get("images")
    return Episode(
        id=episode_id,
        name=name,
        number=number,
        title_id=title_id,
        plot=as_str(data.get("plot")),
        # Episode stills are rarely typed "poster"; the first variant is the still.
        image_filename=_poster_filename(images) or _first_filename(images) or "",
    )


def to_episodes(payload: Mapping[str, Any]) -> list[Episode]:
    """Map ``props.loadedSeason.episodes[]``.

    The owning title id is ``loadedSeason.title_id``, falling back to
    ``props.title.id`` and finally ``0``. Movies have no loaded season and
    yield an empty list.
    """
    props = _props(payload)
    season = as_mapping(props.get("loadedSeason"))
    if season is None:
        return []

    title_id = as_int(season.get("title_id"))
    if title_id is None:
        title = as_mapping(props.get("title")) or {}
        title_id = as_int(title.get("id")) or 0

    raw_episodes = as_list(season.get("episodes"))
    episodes = [_episode(raw, title_id) for raw in raw_episodes]
    kept = [episode for episode in episodes if episode is not None]
    log.debug("episodes_mapped", total=len(raw_episodes), kept=len(kept))
    return kept
