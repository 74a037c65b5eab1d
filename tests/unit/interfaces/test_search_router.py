"""Tests for the streaming search endpoint."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any, Callable
from unittest.mock import MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from animesearch.domain.entities import Rule
from animesearch.interfaces.api.search.router import (
    ERR_ANIME_REQUIRED,
    ERR_NO_MATCHING_RULES,
    ERR_RULES_REQUIRED,
    router,
)

_LINES = ['{"total":1}\n', '{"progress":{"completed":1,"total":1}}\n', '{"done":true}\n']


async def _lines(*_args: Any, **_kwargs: Any) -> AsyncIterator[str]:
    for line in _LINES:
        yield line


def _make_app(*, selected: list[Rule] | None = None) -> tuple[FastAPI, MagicMock, MagicMock]:
    """Create a minimal FastAPI app with the search router."""
    app = FastAPI()
    app.include_router(router)

    rules = MagicMock()
    rules.select.return_value = selected or []
    app.state.rules = rules

    search_stream_uc = MagicMock()
    search_stream_uc.stream.side_effect = _lines
    app.state.search_stream_uc = search_stream_uc

    return app, rules, search_stream_uc


class TestValidation:
    def test_missing_anime(self) -> None:
        app, _, uc = _make_app()
        resp = TestClient(app).post("/", data={"rules": "demo"})
        assert resp.status_code == 400
        assert resp.json() == {"error": ERR_ANIME_REQUIRED}
        uc.stream.assert_not_called()

    def test_blank_anime(self) -> None:
        app, _, _ = _make_app()
        resp = TestClient(app).post("/", data={"anime": "   ", "rules": "demo"})
        assert resp.status_code == 400
        assert resp.json() == {"error": ERR_ANIME_REQUIRED}

    def test_missing_rules(self) -> None:
        app, _, _ = _make_app()
        resp = TestClient(app).post("/", data={"anime": "naruto"})
        assert resp.status_code == 400
        assert resp.json() == {"error": ERR_RULES_REQUIRED}

    def test_no_matching_rules(self) -> None:
        app, rules, _ = _make_app(selected=[])
        resp = TestClient(app).post("/", data={"anime": "naruto", "rules": "ghost"})
        assert resp.status_code == 400
        assert resp.json() == {"error": ERR_NO_MATCHING_RULES}
        rules.select.assert_called_once_with(["ghost"])


class TestStreaming:
    def test_streams_event_lines(self, rule: Rule) -> None:
        app, rules, uc = _make_app(selected=[rule])

        resp = TestClient(app).post(
            "/", data={"anime": " naruto ", "rules": "demo, other"}
        )

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "text/event-stream; charset=utf-8"
        assert resp.headers["cache-control"] == "no-cache"
        assert [json.loads(line) for line in resp.text.splitlines()] == [
            {"total": 1},
            {"progress": {"completed": 1, "total": 1}},
            {"done": True},
        ]
        rules.select.assert_called_once_with(["demo", " other"])
        uc.stream.assert_called_once_with("naruto", [rule], fetch_episodes=False)

    def test_episodes_flag(self, rule: Rule) -> None:
        app, _, uc = _make_app(selected=[rule])

        TestClient(app).post(
            "/", data={"anime": "naruto", "rules": "demo", "episodes": "true"}
        )

        uc.stream.assert_called_once_with("naruto", [rule], fetch_episodes=True)

    def test_episodes_flag_other_values_false(self, rule: Rule) -> None:
        app, _, uc = _make_app(selected=[rule])

        TestClient(app).post(
            "/", data={"anime": "naruto", "rules": "demo", "episodes": "yes"}
        )

        assert uc.stream.call_args.kwargs["fetch_episodes"] is False

    def test_multipart_form(self, rule_factory: Callable[..., Rule]) -> None:
        rule = rule_factory()
        app, _, uc = _make_app(selected=[rule])

        resp = TestClient(app).post(
            "/",
            files={
                "anime": (None, "进击的巨人"),
                "rules": (None, "demo"),
                "episodes": (None, "1"),
            },
        )

        assert resp.status_code == 200
        uc.stream.assert_called_once_with("进击的巨人", [rule], fetch_episodes=True)
