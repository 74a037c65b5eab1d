"""Streaming protocol events emitted by the parallel search.

Events are a tagged union. On the wire the variant is identified by which
fields are present, see ``to_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .search import SearchResultItem

ERROR_COLOR = "red"


@dataclass(frozen=True)
class StreamProgress:
    completed: int
    total: int

    def to_dict(self) -> dict[str, int]:
        return {"completed": self.completed, "total": self.total}


@dataclass(frozen=True)
class StreamResult:
    """Per-rule payload shown to the client."""

    name: str
    color: str
    tags: list[str] = field(default_factory=list)
    items: list[SearchResultItem] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color,
            "tags": list(self.tags),
            "items": [item.to_dict() for item in self.items],
            "error": self.error,
        }


@dataclass(frozen=True)
class InitEvent:
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total}


@dataclass(frozen=True)
class ProgressEvent:
    progress: StreamProgress

    def to_dict(self) -> dict[str, Any]:
        return {"progress": self.progress.to_dict()}


@dataclass(frozen=True)
class ResultEvent:
    progress: StreamProgress
    result: StreamResult

    def to_dict(self) -> dict[str, Any]:
        return {"progress": self.progress.to_dict(), "result": self.result.to_dict()}


@dataclass(frozen=True)
class DoneEvent:
    done: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"done": self.done}


StreamEvent = Union[InitEvent, ProgressEvent, ResultEvent, DoneEvent]
