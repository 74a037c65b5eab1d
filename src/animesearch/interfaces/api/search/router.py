"""Streaming multi-rule search endpoint.

POST / with form fields ``anime`` (keyword), ``rules`` (comma separated
rule names) and optional ``episodes`` (``1``/``true``).  The response body
is one JSON event per line: init, progress/result per rule, done.
"""

from __future__ import annotations

from typing import Annotated, Optional, cast

import structlog
from fastapi import APIRouter, Form, Request
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.responses import Response

from animesearch.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["search"])

STREAM_MEDIA_TYPE = "text/event-stream; charset=utf-8"
STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

ERR_ANIME_REQUIRED = "Anime name is required"
ERR_RULES_REQUIRED = (
    "Rules are required. Use 'rules' field to specify rule names (comma separated)"
)
ERR_NO_MATCHING_RULES = "No matching rules found"


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400)


def _parse_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    value = value.strip()
    return value == "1" or value.lower() == "true"


@router.post("/")
async def search(
    request: Request,
    anime: Annotated[Optional[str], Form()] = None,
    rules: Annotated[Optional[str], Form()] = None,
    episodes: Annotated[Optional[str], Form()] = None,
) -> Response:
    state = cast(AppState, request.app.state)

    keyword = (anime or "").strip()
    if not keyword:
        return _bad_request(ERR_ANIME_REQUIRED)

    rule_names = (rules or "").strip()
    if not rule_names:
        return _bad_request(ERR_RULES_REQUIRED)

    selected = state.rules.select(rule_names.split(","))
    if not selected:
        log.info("search_no_matching_rules", requested=rule_names)
        return _bad_request(ERR_NO_MATCHING_RULES)

    lines = state.search_stream_uc.stream(
        keyword,
        selected,
        fetch_episodes=_parse_flag(episodes),
    )
    return StreamingResponse(
        lines,
        media_type=STREAM_MEDIA_TYPE,
        headers=STREAM_HEADERS,
    )
