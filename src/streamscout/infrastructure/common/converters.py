"""Type-checked casts for untrusted JSON values.

Each helper returns the value when it already has the expected type and a
default otherwise. Nothing here coerces across types ("12" is not an int).
"""

from __future__ import annotations

from typing import Any, Mapping


def as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def as_int(value: Any) -> int | None:
    """Return *value* if it is a JSON integer, else None.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def as_mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def as_display_str(value: Any) -> str:
    """Render a string or number field (score, age) as text."""
    if isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def names_of(value: Any) -> list[str]:
    """Collect the ``name`` strings of a list of objects, skipping malformed ones."""
    names: list[str] = []
    for item in as_list(value):
        mapping = as_mapping(item)
        if mapping is None:
            continue
        name = mapping.get("name")
        if isinstance(name, str):
            names.append(name)
    return names
