"""Fixtures for API endpoint tests.

Apps are built with ``create_app`` and their state is filled in directly,
so the lifespan (and with it any real upstream client) never runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from pantry_chef.core.config import Settings
from pantry_chef.factory import create_app


if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import FastAPI


@pytest.fixture
def make_app() -> Callable[..., FastAPI]:
    """Build an app with the given settings overrides and state."""

    def _make(
        *,
        upstream_client: object | None = None,
        generation_service: object | None = None,
        **settings_overrides: object,
    ) -> FastAPI:
        settings = Settings(APP_ENV="test", **settings_overrides)  # type: ignore[arg-type]
        app = create_app(settings)
        app.state.upstream_client = upstream_client
        app.state.chat_client = None
        app.state.generation_service = generation_service
        return app

    return _make


@pytest.fixture
def mock_generation_service() -> MagicMock:
    """Create a mock generation service."""
    service = MagicMock(spec=["generate"])
    service.generate = AsyncMock()
    return service


@pytest.fixture
def client_for(make_app: Callable[..., FastAPI]) -> Callable[..., TestClient]:
    """Build a TestClient around ``make_app``."""

    def _client(**kwargs: object) -> TestClient:
        return TestClient(make_app(**kwargs), raise_server_exceptions=False)

    return _client
