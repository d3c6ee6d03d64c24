"""Multi-hop resolution of a content page to an authorized playlist URL.

Hops, each a fetch + extraction, strictly sequential::

    detail page --a.play--> play link --iframe--> embed page
        --window.masterPlaylist--> playlist url + token + expires --> final url

Any hop may fail with ``ExtractionError`` (or ``NetworkError`` from the
fetcher); a failure ends the run. There is no retry: callers re-invoke the
whole chain.
"""

from __future__ import annotations

import asyncio
import re
from urllib.parse import urlsplit, urlunsplit

import structlog

from streamscout.domain.entities.playback import ResolutionState, StreamResolution
from streamscout.domain.exceptions import ExtractionError, StreamScoutError
from streamscout.domain.ports.page_fetcher import PageFetcherPort
from streamscout.infrastructure.common.html_selectors import first_attr, parse_html
from streamscout.infrastructure.config.schema import SiteSettings

log = structlog.get_logger(__name__)

PLAY_LINK_SELECTOR = "a.play"
EMBED_SELECTOR = "iframe"
MANIFEST_MARKER = "window.masterPlaylist"

_PLAYLIST_URL_RE = re.compile(r"url:\s*'([^']+)'")
_TOKEN_RE = re.compile(r"'token':\s*'([^']+)'")
_EXPIRES_RE = re.compile(r"'expires':\s*'([^']+)'")

_EXISTING_QUERY_SUFFIX = "?b=1"
_PATCH_PARAM = "h=1"

HOP_PLAY_LINK = "play_link"
HOP_EMBED = "embed"
HOP_MANIFEST = "manifest"


def assemble_stream_url(
    base_url: str,
    token: str,
    expires: str,
    *,
    patch_stream: bool = False,
) -> str:
    """Append ``token``/``expires`` (and optionally ``h=1``) to a playlist URL.

    A base ending in ``?b=1`` already has a query string and is continued
    with ``&``; anything else starts a new one with ``?``.
    """
    separator = "&" if base_url.endswith(_EXISTING_QUERY_SUFFIX) else "?"
    final_url = f"{base_url}{separator}token={token}&expires={expires}"
    if patch_stream:
        final_url += f"&{_PATCH_PARAM}"
    return final_url


def to_play_link(watch_href: str) -> str:
    """Turn a ``/watch/...`` link into its ``/iframe/...`` counterpart.

    Only a ``watch`` path segment is rewritten; host and query stay as-is.
    """
    parts = urlsplit(watch_href)
    segments = ["iframe" if s == "watch" else s for s in parts.path.split("/")]
    return urlunsplit(parts._replace(path="/".join(segments)))


def _search(pattern: re.Pattern[str], text: str, field: str) -> str:
    match = pattern.search(text)
    if match is None:
        raise ExtractionError(HOP_MANIFEST, f"no {field} in embed page", field=field)
    return match.group(1)


def parse_manifest(embed_html: str) -> tuple[str, str, str]:
    """Extract ``(playlist_base_url, token, expires)`` from embed page text.

    Raises:
        ExtractionError: the ``window.masterPlaylist`` marker is absent, or
            one of the three values does not match (``field`` names it).
    """
    if MANIFEST_MARKER not in embed_html:
        raise ExtractionError(HOP_MANIFEST, f"{MANIFEST_MARKER} not found in embed page")
    return (
        _search(_PLAYLIST_URL_RE, embed_html, "url"),
        _search(_TOKEN_RE, embed_html, "token"),
        _search(_EXPIRES_RE, embed_html, "expires"),
    )


class StreamResolutionChain:
    """Resolves play links and detail pages to a ``StreamResolution``.

    Holds no per-run state, so one instance serves any number of concurrent
    resolutions. Settings are passed per call.
    """

    def __init__(self, fetcher: PageFetcherPort) -> None:
        self._fetcher = fetcher

    async def find_play_link(self, detail_url: str) -> str | None:
        """Hop 1: the detail page's ``a.play`` href, rewritten to ``/iframe/``.

        Returns ``None`` when the page has no such anchor; that is not an
        error, as many titles only expose a precomputed play URL.
        """
        html = await self._fetcher.fetch(detail_url)
        soup = await asyncio.to_thread(parse_html, html)
        href = first_attr(soup, PLAY_LINK_SELECTOR, "href", base_url=detail_url)
        if href is None:
            log.info("play_link_absent", detail_url=detail_url)
            return None
        return to_play_link(href)

    async def find_embed_url(self, play_url: str) -> str:
        """Hop 2: ``src`` of the first ``iframe`` on the play page."""
        html = await self._fetcher.fetch(play_url)
        soup = await asyncio.to_thread(parse_html, html)
        embed_url = first_attr(soup, EMBED_SELECTOR, "src", base_url=play_url)
        if embed_url is None:
            raise ExtractionError(HOP_EMBED, f"no iframe with src on {play_url}")
        return embed_url

    async def fetch_manifest(self, embed_url: str) -> tuple[str, str, str]:
        """Hop 3: playlist base URL, token and expiry from the embed page."""
        html = await self._fetcher.fetch(embed_url)
        return parse_manifest(html)

    async def resolve(self, play_url: str, settings: SiteSettings) -> StreamResolution:
        """Run hops 2-4 starting from a play (``/iframe/``) URL."""
        state = ResolutionState.PLAY_LINK_RESOLVED
        try:
            embed_url = await self.find_embed_url(play_url)
            state = self._advance(
                state, ResolutionState.EMBED_RESOLVED, play_url, embed_url=embed_url
            )

            base_url, token, expires = await self.fetch_manifest(embed_url)
            state = self._advance(
                state, ResolutionState.MANIFEST_FOUND, play_url, base_url=base_url
            )
        except StreamScoutError as exc:
            self._advance(state, ResolutionState.FAILED, play_url)
            log.warning(
                "stream_resolution_failed",
                play_url=play_url,
                failed_after=state.value,
                hop=getattr(exc, "hop", None),
                field=getattr(exc, "field", None),
                error=str(exc),
            )
            raise

        final_url = assemble_stream_url(
            base_url, token, expires, patch_stream=settings.patch_stream
        )
        self._advance(state, ResolutionState.ASSEMBLED, play_url, final_url=final_url)
        return StreamResolution(
            playlist_base_url=base_url,
            token=token,
            expiry=expires,
            final_url=final_url,
            embed_url=embed_url,
            play_url=play_url,
        )

    async def resolve_title(
        self,
        detail_url: str,
        settings: SiteSettings,
        *,
        fallback_play_url: str | None = None,
    ) -> StreamResolution:
        """Run the full chain from a detail page.

        Uses the page's own play link when present, otherwise
        *fallback_play_url* (a title's or episode's precomputed URL).

        Raises:
            ExtractionError: hop ``play_link`` when neither is available.
        """
        play_url = await self.find_play_link(detail_url)
        if play_url is None:
            play_url = fallback_play_url
        if not play_url:
            log.warning(
                "stream_resolution_failed",
                detail_url=detail_url,
                failed_after=ResolutionState.START.value,
                hop=HOP_PLAY_LINK,
            )
            raise ExtractionError(HOP_PLAY_LINK, f"no play link on {detail_url}")

        self._advance(
            ResolutionState.START, ResolutionState.PLAY_LINK_RESOLVED, play_url
        )
        return await self.resolve(play_url, settings)

    @staticmethod
    def _advance(
        current: ResolutionState,
        target: ResolutionState,
        play_url: str,
        **context: str,
    ) -> ResolutionState:
        log.debug(
            "stream_resolution_step",
            play_url=play_url,
            from_state=current.value,
            to_state=target.value,
            **context,
        )
        return target
