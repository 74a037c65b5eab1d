"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import structlog
from fastapi import FastAPI

from animesearch.application.use_cases import ListRulesUseCase, SearchStreamUseCase
from animesearch.infrastructure.http import HttpxFetcher, build_http_client
from animesearch.infrastructure.rules import RuleRegistry
from animesearch.infrastructure.search import RuleSearchEngine
from animesearch.infrastructure.stream import render_event_line
from animesearch.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build shared resources on startup, release them on shutdown."""
    state = cast(AppState, app.state)
    config = state.config

    # 1) Shared HTTP client (one connection pool for every rule search)
    state.http_client = build_http_client(
        timeout_seconds=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
        accept_language=config.http_accept_language,
        verify_tls=config.http_verify_tls,
        follow_redirects=config.http_follow_redirects,
    )
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        verify_tls=config.http_verify_tls,
    )

    # 2) Rule registry (loaded once, read-only afterwards)
    registry = RuleRegistry(rules_dir=config.rules_dir)
    registry.discover()
    state.rules = registry

    # 3) Per-rule search
    state.rule_search = RuleSearchEngine(
        fetcher=HttpxFetcher(http_client=state.http_client),
        max_episode_items=config.search_max_episode_items,
    )

    # 4) Use cases
    state.search_stream_uc = SearchStreamUseCase(
        searcher=state.rule_search,
        encode=render_event_line,
        channel_capacity=config.search_channel_capacity,
    )
    state.list_rules_uc = ListRulesUseCase(rules=state.rules)

    log.info("app_startup_complete", rules=registry.count)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
