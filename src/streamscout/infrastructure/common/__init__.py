"""Common infrastructure utilities."""

from __future__ import annotations

from .converters import as_display_str, as_int, as_list, as_mapping, as_str, names_of
from .html_selectors import first_attr, parse_html, select_first

__all__ = [
    "as_display_str",
    "as_int",
    "as_list",
    "as_mapping",
    "as_str",
    "first_attr",
    "names_of",
    "parse_html",
    "select_first",
]
