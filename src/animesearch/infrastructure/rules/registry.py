"""Rule registry: loads every rule file once and serves it read-only."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from animesearch.domain.entities import Rule
from animesearch.domain.rules import RuleError, RuleNotFoundError

from .loader import load_rule_file

log = structlog.get_logger(__name__)

# Kazumi repository index, not a rule.
INDEX_FILE_NAME = "index.json"


class RuleRegistry:
    """
    Eager rule registry.

    discover():
      - parses every ``*.json`` file in ``rules_dir`` once
      - skips ``index.json`` and files that fail to load (logged)
      - first file (by file name) wins on duplicate rule names

    The loaded rules are immutable and shared by every search.
    """

    def __init__(self, rules_dir: Path) -> None:
        self._rules_dir = rules_dir
        self._discovered: bool = False
        self._rules: dict[str, Rule] = {}

    @property
    def count(self) -> int:
        self.discover()
        return len(self._rules)

    def discover(self) -> None:
        if self._discovered:
            return

        self._discovered = True
        self._rules = {}

        if not self._rules_dir.is_dir():
            log.warning("rules_directory_not_found", directory=str(self._rules_dir))
            return

        for path in sorted(self._rules_dir.iterdir(), key=lambda p: p.name):
            if not path.is_file() or path.suffix.lower() != ".json":
                continue
            if path.name == INDEX_FILE_NAME:
                continue

            try:
                rule = load_rule_file(path)
            except RuleError as e:
                log.warning("rule_skipped", rule_file=str(path), error=str(e))
                continue

            if rule.name in self._rules:
                log.warning(
                    "duplicate_rule_skipped",
                    rule=rule.name,
                    rule_file=str(path),
                )
                continue

            self._rules[rule.name] = rule
            log.debug("rule_loaded", rule=rule.name, version=rule.version)

        log.info(
            "rules_loaded",
            count=len(self._rules),
            directory=str(self._rules_dir),
        )

        if not self._rules:
            log.warning("no_rules_found", directory=str(self._rules_dir))

    def list(self) -> list[Rule]:
        self.discover()
        return [self._rules[name] for name in sorted(self._rules)]

    def get(self, name: str) -> Rule:
        self.discover()
        try:
            return self._rules[name]
        except KeyError:
            raise RuleNotFoundError(f"Rule '{name}' not found") from None

    def select(self, names: Iterable[str]) -> list[Rule]:
        """Rules whose name is in *names*, in registry (name) order.

        Unknown names are ignored.
        """
        wanted = {n.strip() for n in names if n.strip()}
        return [rule for rule in self.list() if rule.name in wanted]
