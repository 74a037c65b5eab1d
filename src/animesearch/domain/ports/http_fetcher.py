"""Port for outbound page fetching."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class FetcherPort(Protocol):
    """Async interface for fetching HTML pages.

    Implementations raise ``FetchError`` subclasses on timeouts, transport
    failures and non-2xx responses.
    """

    async def get_text(self, url: str, *, referer: str | None = None) -> str: ...

    async def post_form_text(
        self,
        url: str,
        form: Mapping[str, str],
        *,
        referer: str | None = None,
    ) -> str: ...
