"""Shared test fixtures for the animesearch test suite."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable

import pytest

from animesearch.domain.entities import Rule

# ---------------------------------------------------------------------------
# Markup fixtures
# ---------------------------------------------------------------------------

SEARCH_PAGE = """
<html>
  <head><title>Search</title></head>
  <body>
    <ul class="results">
      <li class="item"><h3><a href="/detail/1">Title One</a></h3></li>
      <li class="item"><h3><a data-href="/detail/2">Title Two</a></h3></li>
      <li class="item"><h3><span>No Link</span></h3></li>
      <li class="item"><h3><a href="https://cdn.example.org/detail/3">  Title Three </a></h3></li>
    </ul>
  </body>
</html>
"""

DETAIL_PAGE = """
<html>
  <body>
    <div class="roads">
      <ul class="road">
        <li><a href="/play/1-1">第1集</a></li>
        <li><a href="/play/1-2">第2集</a></li>
      </ul>
      <ul class="road"></ul>
      <ul class="road">
        <li><a href="play/3-1">第1集</a></li>
        <li><a>no link</a></li>
      </ul>
    </div>
  </body>
</html>
"""


def search_page_with(count: int) -> str:
    """A search page listing ``count`` linked titles."""
    rows = "".join(
        f'<li class="item"><h3><a href="/detail/{i}">Title {i}</a></h3></li>'
        for i in range(1, count + 1)
    )
    return f'<html><body><ul class="results">{rows}</ul></body></html>'


# ---------------------------------------------------------------------------
# Rule fixtures
# ---------------------------------------------------------------------------


def make_rule(**overrides: Any) -> Rule:
    """Rule matching SEARCH_PAGE / DETAIL_PAGE; keyword args override fields."""
    fields: dict[str, Any] = {
        "name": "demo",
        "base_url": "https://anime.example.com/",
        "search_url": "https://anime.example.com/search?wd=@keyword",
        "search_list": "//li[@class='item']",
        "search_name": "//h3",
        "search_result": "//h3/a",
        "chapter_roads": "//ul[@class='road']",
        "chapter_result": "//li/a",
        "color": "blue",
        "tags": ("anime",),
        "version": "1.0",
    }
    fields.update(overrides)
    return Rule(**fields)


@pytest.fixture()
def rule() -> Rule:
    return make_rule()


@pytest.fixture()
def rule_factory() -> Callable[..., Rule]:
    return make_rule


@pytest.fixture()
def search_page() -> str:
    return SEARCH_PAGE


@pytest.fixture()
def detail_page() -> str:
    return DETAIL_PAGE


@pytest.fixture()
def search_page_factory() -> Callable[[int], str]:
    return search_page_with


@pytest.fixture()
def rule_json() -> dict[str, Any]:
    """Minimal Kazumi-format rule document."""
    return {
        "api": "3",
        "type": "anime",
        "name": "demo",
        "version": "1.2",
        "muliSources": True,
        "useWebview": False,
        "useNativePlayer": True,
        "usePost": False,
        "userAgent": "",
        "baseURL": "https://anime.example.com/",
        "searchURL": "https://anime.example.com/search?wd=@keyword",
        "searchList": "//li[@class='item']",
        "searchName": "//h3",
        "searchResult": "//h3/a",
        "chapterRoads": "//ul[@class='road']",
        "chapterResult": "//li/a",
        "referer": "",
    }


@pytest.fixture()
def write_rule(tmp_path: Path) -> Callable[..., Path]:
    """Write a rule document (dict or raw text) into ``tmp_path/rules``."""
    rules_dir = tmp_path / "rules"
    rules_dir.mkdir(exist_ok=True)

    def _write(file_name: str, content: dict[str, Any] | str) -> Path:
        path = rules_dir / file_name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _clear_animesearch_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's ANIMESEARCH_* variables out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("ANIMESEARCH_"):
            monkeypatch.delenv(key, raising=False)
