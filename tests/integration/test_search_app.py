"""End-to-end tests of the assembled application.

Real lifespan wiring (rule registry from disk, shared httpx client,
extraction, orchestration) with rule sources mocked via respx.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from animesearch.infrastructure.config import load_config
from animesearch.interfaces.app import create_app

pytestmark = pytest.mark.integration

_SEARCH_PAGE = """
<html><body>
  <div class="list">
    <div class="row"><a class="title" href="/v/1">葬送的芙莉莲</a></div>
    <div class="row"><a class="title" href="/v/2">葬送的芙莉莲 剧场版</a></div>
  </div>
</body></html>
"""

_DETAIL_PAGE = """
<html><body>
  <ul class="playlist"><li><a href="/p/1/1">第01集</a></li><li><a href="/p/1/2">第02集</a></li></ul>
</body></html>
"""


def _rule_doc(name: str, host: str, **extra: Any) -> dict[str, Any]:
    return {
        "api": "1",
        "type": "anime",
        "name": name,
        "version": "1.0",
        "baseURL": f"https://{host}/",
        "searchURL": f"https://{host}/search?q=@keyword",
        "searchList": "//div[@class='row']",
        "searchName": "//a[@class='title']",
        "searchResult": "//a[@class='title']",
        "chapterRoads": "//ul[@class='playlist']",
        "chapterResult": "//li/a",
        **extra,
    }


@pytest.fixture()
def client(tmp_path: Path, write_rule: Callable[..., Path]) -> TestClient:
    write_rule("alpha.json", _rule_doc("alpha", "alpha.example", color="blue", tags=["hd"]))
    write_rule("beta.json", _rule_doc("beta", "beta.example"))
    write_rule("index.json", "[]")

    config = load_config(
        cli_overrides={"rules_dir": str(tmp_path / "rules"), "environment": "test"}
    )
    with TestClient(create_app(config)) as test_client:
        yield test_client


def _events(resp: httpx.Response) -> list[dict[str, Any]]:
    return [json.loads(line) for line in resp.text.splitlines() if line]


class TestMetadataEndpoints:
    def test_rules(self, client: TestClient) -> None:
        resp = client.get("/rules")
        assert resp.status_code == 200
        assert resp.json() == [
            {
                "name": "alpha",
                "version": "1.0",
                "baseUrl": "https://alpha.example/",
                "color": "blue",
                "tags": ["hd"],
                "magic": False,
            },
            {
                "name": "beta",
                "version": "1.0",
                "baseUrl": "https://beta.example/",
                "color": "gray",
                "tags": [],
                "magic": False,
            },
        ]

    def test_health(self, client: TestClient) -> None:
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["timestamp"].endswith("+00:00")

    def test_api_info(self, client: TestClient) -> None:
        body = client.get("/api").json()
        assert body["name"] == "AnimeSearch API"
        assert "POST /" in body["endpoints"]

    def test_cors_preflight(self, client: TestClient) -> None:
        resp = client.options(
            "/",
            headers={
                "Origin": "https://ui.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"


class TestSearchStream:
    def test_mixed_outcomes(
        self, client: TestClient, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.get(url__startswith="https://alpha.example/search").respond(
            200, text=_SEARCH_PAGE
        )
        respx_mock.get(url__startswith="https://beta.example/search").mock(
            side_effect=httpx.ConnectTimeout("slow")
        )

        resp = client.post("/", data={"anime": "葬送的芙莉莲", "rules": "alpha,beta"})

        assert resp.status_code == 200
        events = _events(resp)
        assert events[0] == {"total": 2}
        assert events[-1] == {"done": True}

        results = {e["result"]["name"]: e["result"] for e in events[1:-1]}
        assert [i["url"] for i in results["alpha"]["items"]] == [
            "https://alpha.example/v/1",
            "https://alpha.example/v/2",
        ]
        assert results["alpha"]["error"] is None
        assert results["beta"]["color"] == "red"
        assert results["beta"]["items"] == []
        assert results["beta"]["error"].startswith("request timed out")
        assert sorted(e["progress"]["completed"] for e in events[1:-1]) == [1, 2]

    def test_with_episodes(
        self, client: TestClient, respx_mock: respx.MockRouter
    ) -> None:
        search = respx_mock.get(url__startswith="https://alpha.example/search").respond(
            200, text=_SEARCH_PAGE
        )
        respx_mock.get(url__startswith="https://alpha.example/v/").respond(
            200, text=_DETAIL_PAGE
        )

        resp = client.post(
            "/", data={"anime": "frieren", "rules": "alpha", "episodes": "1"}
        )

        events = _events(resp)
        items = events[1]["result"]["items"]
        assert items[0]["episodes"] == [
            {
                "episodes": [
                    {"name": "第01集", "url": "https://alpha.example/p/1/1"},
                    {"name": "第02集", "url": "https://alpha.example/p/1/2"},
                ]
            }
        ]
        assert search.calls.last.request.headers["Referer"] == "https://alpha.example/"
        assert search.calls.last.request.url.params["q"] == "frieren"

    def test_unknown_rules(self, client: TestClient) -> None:
        resp = client.post("/", data={"anime": "x", "rules": "ghost"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "No matching rules found"}
