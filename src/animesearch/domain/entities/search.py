"""Search result value objects and search error types.

Pure value objects, no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Episode:
    """One playable unit on a detail page."""

    name: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class EpisodeRoad:
    """One play source (mirror group) of a title."""

    episodes: list[Episode]
    name: str | None = None  # "线路N" when several roads exist

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        data["episodes"] = [ep.to_dict() for ep in self.episodes]
        return data


@dataclass
class SearchResultItem:
    """One matched title from one source."""

    name: str
    url: str
    episodes: list[EpisodeRoad] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "url": self.url}
        if self.episodes is not None:
            data["episodes"] = [road.to_dict() for road in self.episodes]
        return data


@dataclass
class PlatformSearchResult:
    """Outcome of searching one rule: items, an error, or neither."""

    items: list[SearchResultItem] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def with_items(cls, items: list[SearchResultItem]) -> PlatformSearchResult:
        return cls(items=items)

    @classmethod
    def with_error(cls, error: str) -> PlatformSearchResult:
        return cls(items=[], error=error)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def has_output(self) -> bool:
        """True when there is something worth showing to the client."""
        return bool(self.items) or self.error is not None


class SearchError(Exception):
    """Base error for per-rule search failures."""


class FetchError(SearchError):
    """Outbound request did not produce a usable response body."""


class FetchTimeoutError(FetchError):
    def __init__(self, url: str) -> None:
        super().__init__(f"request timed out: {url}")
        self.url = url


class FetchFailedError(FetchError):
    pass


class BadStatusError(FetchError):
    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"unexpected response status {status_code}: {url}")
        self.status_code = status_code
        self.url = url


class ExtractionError(SearchError):
    """A required selector could not be evaluated against the document."""
