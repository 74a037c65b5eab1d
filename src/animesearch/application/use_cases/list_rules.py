"""Use case for listing the loaded search rules."""

from __future__ import annotations

from typing import Any

from animesearch.domain.ports import RuleRegistryPort


class ListRulesUseCase:
    """Collects display metadata of every loaded rule, sorted by name."""

    def __init__(self, *, rules: RuleRegistryPort) -> None:
        self._rules = rules

    def execute(self) -> list[dict[str, Any]]:
        return [
            {
                "name": rule.name,
                "version": rule.version,
                "baseUrl": rule.base_url,
                "color": rule.color,
                "tags": list(rule.tags),
                "magic": rule.magic,
            }
            for rule in self._rules.list()
        ]
