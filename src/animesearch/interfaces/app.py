"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

from animesearch.infrastructure.config import AppConfig
from animesearch.interfaces.app_state import AppState
from animesearch.interfaces.composition import lifespan

log = structlog.get_logger(__name__)

API_NAME = "AnimeSearch API"
API_VERSION = "0.2.0"
API_DESCRIPTION = "Online anime aggregate search backend"


def _api_info() -> dict[str, Any]:
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "endpoints": {
            "POST /": (
                "Search (form: anime=keyword, rules=rule1,rule2, episodes=1); "
                "streams newline-delimited JSON events"
            ),
            "GET /rules": "List loaded rules",
            "GET /health": "Health check",
            "GET /api": "This document",
        },
    }


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app. Configuration only, no resource initialization.

    Resources (HTTP client, rules, use cases) are created in lifespan().
    """
    app = FastAPI(
        title="AnimeSearch",
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    from animesearch.interfaces.api.rules.router import router as rules_router
    from animesearch.interfaces.api.search.router import router as search_router

    app.include_router(search_router)
    app.include_router(rules_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe with the current UTC time."""
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api")
    async def api_info() -> dict[str, Any]:
        return _api_info()

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # For streamed searches this measures time to first byte.
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
