"""CSS-selector helpers over BeautifulSoup.

Every site-specific selector lives with its caller; these helpers only
wrap the parser so it can be swapped in one place.
"""

from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string with the ``lxml`` parser."""
    return BeautifulSoup(html, "lxml")


def select_first(root: BeautifulSoup | Tag, selector: str, *fallback_selectors: str) -> Tag | None:
    """Return the first element matched by the first selector that matches."""
    for sel in (selector, *fallback_selectors):
        match = root.select_one(sel)
        if match is not None:
            return match
    return None


def first_attr(
    root: BeautifulSoup | Tag,
    selector: str,
    attr: str,
    *,
    base_url: str = "",
) -> str | None:
    """Read *attr* of the first element matching *selector*.

    Returns ``None`` when no element matches or the attribute is empty.
    Relative values are resolved against *base_url* when given.
    """
    match = root.select_one(selector)
    if match is None:
        return None
    value = match.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    if not value or not str(value).strip():
        return None
    value = str(value).strip()
    return urljoin(base_url, value) if base_url else value
