"""Tests for ListRulesUseCase."""

from __future__ import annotations

from typing import Callable
from unittest.mock import MagicMock

from animesearch.application.use_cases import ListRulesUseCase
from animesearch.domain.entities import Rule


def test_execute_returns_display_metadata(rule_factory: Callable[..., Rule]) -> None:
    rules = MagicMock()
    rules.list.return_value = [
        rule_factory(name="alpha", color="pink", tags=("a", "b"), magic=True),
        rule_factory(name="beta", version="2"),
    ]

    result = ListRulesUseCase(rules=rules).execute()

    assert result == [
        {
            "name": "alpha",
            "version": "1.0",
            "baseUrl": "https://anime.example.com/",
            "color": "pink",
            "tags": ["a", "b"],
            "magic": True,
        },
        {
            "name": "beta",
            "version": "2",
            "baseUrl": "https://anime.example.com/",
            "color": "blue",
            "tags": ["anime"],
            "magic": False,
        },
    ]


def test_execute_empty() -> None:
    rules = MagicMock()
    rules.list.return_value = []
    assert ListRulesUseCase(rules=rules).execute() == []
