"""Port for rule discovery and access."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from animesearch.domain.entities.rule import Rule


@runtime_checkable
class RuleRegistryPort(Protocol):
    """Synchronous, read-only view of the loaded rule set."""

    def discover(self) -> None: ...
    def list(self) -> list[Rule]: ...
    def get(self, name: str) -> Rule: ...
    def select(self, names: Iterable[str]) -> list[Rule]: ...
