"""Port for searching a single rule."""

from __future__ import annotations

from typing import Protocol

from animesearch.domain.entities.rule import Rule
from animesearch.domain.entities.search import PlatformSearchResult


class RuleSearchPort(Protocol):
    """Runs one rule's search; failures come back as ``result.error``."""

    async def search(
        self, rule: Rule, keyword: str, *, fetch_episodes: bool = False
    ) -> PlatformSearchResult: ...
