"""httpx-backed page fetcher shared by all rule searches.

One ``httpx.AsyncClient`` is created at startup (see ``build_http_client``)
and reused across every concurrent search.  TLS verification is off by
default: several rule sources serve misconfigured certificates.
"""

from __future__ import annotations

from collections.abc import Mapping

import httpx
import structlog

from animesearch.domain.entities import (
    BadStatusError,
    FetchFailedError,
    FetchTimeoutError,
)

from .constants import (
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)

log = structlog.get_logger(__name__)


def build_http_client(
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
    verify_tls: bool = False,
    follow_redirects: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared client with browser-like default headers."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        headers={
            "User-Agent": user_agent,
            "Accept-Language": accept_language,
            "Connection": "keep-alive",
        },
        follow_redirects=follow_redirects,
        verify=verify_tls,
        transport=transport,
    )


class HttpxFetcher:
    """Fetch page bodies as text, mapping httpx failures to ``FetchError``.

    Args:
        http_client: Shared httpx.AsyncClient (owned by the caller).
    """

    def __init__(self, *, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def get_text(self, url: str, *, referer: str | None = None) -> str:
        return await self._send("GET", url, referer=referer)

    async def post_form_text(
        self,
        url: str,
        form: Mapping[str, str],
        *,
        referer: str | None = None,
    ) -> str:
        return await self._send("POST", url, referer=referer, data=dict(form))

    async def _send(
        self,
        method: str,
        url: str,
        *,
        referer: str | None,
        data: dict[str, str] | None = None,
    ) -> str:
        headers = {"Referer": referer} if referer else None
        try:
            resp = await self._http.request(method, url, headers=headers, data=data)
        except httpx.TimeoutException as e:
            log.debug("fetch_timeout", method=method, url=url)
            raise FetchTimeoutError(url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.debug("fetch_failed", method=method, url=url, error=str(e))
            raise FetchFailedError(f"request failed: {e}") from e

        if not resp.is_success:
            log.debug(
                "fetch_bad_status",
                method=method,
                url=url,
                status=resp.status_code,
            )
            raise BadStatusError(resp.status_code, url)

        return resp.text
