"""Unit tests for application factory.

Tests cover:
- create_app function
- Docs exposure per environment
- Router mounting
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi import FastAPI

from pantry_chef.core.config import Settings
from pantry_chef.factory import create_app


pytestmark = pytest.mark.unit


def _paths(app: FastAPI) -> set[str]:
    return {route.path for route in app.routes}  # type: ignore[attr-defined]


class TestCreateApp:
    """Tests for create_app function."""

    def test_creates_fastapi_instance(self) -> None:
        """Should create a FastAPI instance named from settings."""
        settings = Settings(APP_ENV="test")

        app = create_app(settings)

        assert isinstance(app, FastAPI)
        assert app.title == settings.app.name
        assert app.version == settings.app.version

    def test_stores_settings_in_state(self) -> None:
        """Should store settings in app state."""
        settings = Settings(APP_ENV="test")

        app = create_app(settings)

        assert app.state.settings is settings

    def test_mounts_routes_under_prefix(self) -> None:
        """Should mount every endpoint under the v1 prefix."""
        app = create_app(Settings(APP_ENV="test", api={"v1_prefix": "/chef"}))

        assert {
            "/chef/",
            "/chef/health",
            "/chef/ready",
            "/chef/generate",
            "/chef/recipes/generate",
        } <= _paths(app)

    def test_docs_enabled_outside_production(self) -> None:
        """Should expose docs under the prefix in non-production."""
        app = create_app(Settings(APP_ENV="development"))

        assert app.docs_url == "/api/v1/docs"
        assert app.openapi_url == "/api/v1/openapi.json"

    def test_disables_docs_in_production(self) -> None:
        """Should disable docs endpoints in production."""
        with patch("pantry_chef.factory.setup_metrics"):
            app = create_app(Settings(APP_ENV="production"))

        assert app.docs_url is None
        assert app.redoc_url is None
        assert app.openapi_url is None

    def test_sets_up_metrics(self) -> None:
        """Should hand the app and settings to setup_metrics."""
        settings = Settings(APP_ENV="test")

        with patch("pantry_chef.factory.setup_metrics") as mock_setup:
            app = create_app(settings)

        mock_setup.assert_called_once_with(app, settings)

    def test_uses_cached_settings_by_default(self) -> None:
        """Should fall back to get_settings()."""
        app = create_app()

        assert app.state.settings.APP_ENV == "test"
