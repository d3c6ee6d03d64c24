"""httpx-backed page fetcher."""

from __future__ import annotations

from typing import Mapping

import httpx
import structlog

from streamscout.domain.exceptions import NetworkError

from .user_agents import HeaderStrategy

log = structlog.get_logger(__name__)


class HttpxPageFetcher:
    """Fetches page bodies over a shared ``httpx.AsyncClient``.

    Every request carries the headers produced by *header_strategy*;
    explicit per-call headers win over them. Failures are raised as
    ``NetworkError`` and never retried.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        header_strategy: HeaderStrategy,
    ) -> None:
        self._http = http_client
        self._headers = header_strategy

    async def fetch(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        request_headers = {**self._headers(), **(headers or {})}
        try:
            resp = await self._http.get(url, headers=request_headers)
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            log.warning("page_fetch_timeout", url=url)
            raise NetworkError(url, exc) from exc
        except httpx.HTTPStatusError as exc:
            log.warning(
                "page_fetch_http_error",
                url=url,
                status=exc.response.status_code,
            )
            raise NetworkError(url, exc) from exc
        except httpx.HTTPError as exc:
            log.warning("page_fetch_error", url=url, error=str(exc))
            raise NetworkError(url, exc) from exc

        log.debug("page_fetched", url=url, status=resp.status_code, size=len(resp.text))
        return resp.text
