"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

from animesearch.infrastructure.http.constants import (
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "animesearch",
    "environment": "dev",
    "rules": {
        "rules_dir": "./rules",
    },
    "http": {
        "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
        "follow_redirects": True,
        "verify_tls": False,
        "user_agent": DEFAULT_USER_AGENT,
        "accept_language": DEFAULT_ACCEPT_LANGUAGE,
    },
    "search": {
        "max_episode_items": 5,
        "channel_capacity": 100,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
