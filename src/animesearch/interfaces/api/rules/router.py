"""Rule listing endpoint."""

from __future__ import annotations

from typing import Any, cast

from fastapi import APIRouter, Request

from animesearch.interfaces.app_state import AppState

router = APIRouter(tags=["rules"])


@router.get("/rules")
async def list_rules(request: Request) -> list[dict[str, Any]]:
    """Display metadata of every loaded rule, sorted by name."""
    state = cast(AppState, request.app.state)
    return state.list_rules_uc.execute()
