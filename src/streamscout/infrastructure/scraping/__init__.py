"""Site scraping: embedded page props and catalog mapping."""

from .catalog_mapper import (
    to_catalog_entries,
    to_episodes,
    to_sliders,
    to_title_detail,
)
from .page_props import extract_app_props

__all__ = [
    "extract_app_props",
    "to_catalog_entries",
    "to_episodes",
    "to_sliders",
    "to_title_detail",
]
