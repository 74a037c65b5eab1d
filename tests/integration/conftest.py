"""Shared fixtures for integration tests.

These tests wire real infrastructure components (config loader, rule
registry, httpx client) with outbound HTTP mocked via respx.
"""

from __future__ import annotations

import pytest
import respx


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
