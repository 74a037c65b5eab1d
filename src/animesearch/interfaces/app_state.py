"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

import httpx
from starlette.datastructures import State

from animesearch.application.use_cases import ListRulesUseCase, SearchStreamUseCase
from animesearch.domain.ports import RuleRegistryPort, RuleSearchPort
from animesearch.infrastructure.config import AppConfig


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Domain Ports
    rules: RuleRegistryPort
    rule_search: RuleSearchPort

    # Application Services
    search_stream_uc: SearchStreamUseCase
    list_rules_uc: ListRulesUseCase
