"""Catalog value objects scraped from the site's embedded page props.

Pure value objects: no framework dependencies, no I/O. URLs that depend on
the configured base domain are derived on demand because the domain can be
changed at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass


def title_href(base_domain: str, title_id: int, slug: str) -> str:
    """Canonical detail-page URL of a title."""
    return f"https://{base_domain}/it/titles/{title_id}-{slug}"


def cdn_image_url(base_domain: str, filename: str) -> str:
    """CDN URL of an image filename, empty when there is no image."""
    if not filename:
        return ""
    return f"https://cdn.{base_domain}/images/{filename}"


def title_play_url(base_domain: str, title_id: int) -> str:
    return f"https://{base_domain}/iframe/{title_id}"


def episode_play_url(base_domain: str, title_id: int, episode_id: int) -> str:
    return f"https://{base_domain}/iframe/{title_id}?episode_id={episode_id}"


@dataclass(frozen=True)
class CatalogEntry:
    """A title as listed in search results and home-page sliders."""

    name: str
    id: int
    slug: str
    poster_filename: str

    def href(self, base_domain: str) -> str:
        return title_href(base_domain, self.id, self.slug)

    def image_url(self, base_domain: str) -> str:
        return cdn_image_url(base_domain, self.poster_filename)


@dataclass(frozen=True)
class Slider:
    """A named home-page carousel (e.g. "trending", "latest")."""

    name: str
    label: str = ""
    titles: tuple[CatalogEntry, ...] = ()


@dataclass(frozen=True)
class TitleDetail:
    """Full description of a movie or show.

    Every field is defaultable; a detail page with missing data still
    renders.
    """

    id: int = 0
    name: str = ""
    original_name: str = ""
    plot: str = ""
    runtime: int = 0
    release_date: str = ""
    score: str = ""
    age_rating: str = ""
    quality: str = ""
    genres: tuple[str, ...] = ()
    main_actors: tuple[str, ...] = ()
    directors: tuple[str, ...] = ()
    seasons_count: int = 0
    poster_filename: str = ""
    play_url: str | None = None


@dataclass(frozen=True)
class Episode:
    """A single episode of the currently loaded season."""

    id: int
    name: str
    number: int
    title_id: int
    plot: str = ""
    image_filename: str = ""

    def play_url(self, base_domain: str) -> str:
        return episode_play_url(base_domain, self.title_id, self.id)

    def image_url(self, base_domain: str) -> str:
        return cdn_image_url(base_domain, self.image_filename)
