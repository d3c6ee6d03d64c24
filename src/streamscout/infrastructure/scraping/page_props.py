"""Extraction of the JSON page props the site embeds in its HTML.

Every catalog/detail page renders ``<div id="app" data-page="...">`` where
the attribute holds the HTML-escaped JSON of the page's props. Decoding is
two-stage: DOM query for the attribute string, then JSON.
"""

from __future__ import annotations

import json
from typing import Any

import structlog

from streamscout.domain.exceptions import ParseError
from streamscout.infrastructure.common.html_selectors import parse_html, select_first

log = structlog.get_logger(__name__)

APP_CONTAINER_SELECTOR = "#app"
PAGE_PROPS_ATTR = "data-page"


def extract_app_props(html: str) -> dict[str, Any]:
    """Return the decoded ``data-page`` payload of the ``#app`` element.

    Raises:
        ParseError: container or attribute missing, invalid JSON, or a JSON
            value that is not an object.
    """
    soup = parse_html(html)
    container = select_first(soup, APP_CONTAINER_SELECTOR)
    if container is None:
        raise ParseError(f"no element matching {APP_CONTAINER_SELECTOR!r}")

    raw = container.get(PAGE_PROPS_ATTR)
    if not isinstance(raw, str) or not raw.strip():
        raise ParseError(f"{APP_CONTAINER_SELECTOR!r} has no {PAGE_PROPS_ATTR!r} attribute")

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"{PAGE_PROPS_ATTR!r} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ParseError(
            f"{PAGE_PROPS_ATTR!r} must decode to an object, got {type(payload).__name__}"
        )

    props = payload.get("props")
    log.debug(
        "page_props_extracted",
        keys=sorted(props) if isinstance(props, dict) else [],
    )
    return payload
