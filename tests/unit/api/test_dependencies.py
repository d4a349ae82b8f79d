"""Unit tests for API dependencies.

Tests cover the request gates and the dependency functions that retrieve
services from app.state.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from pantry_chef.api.dependencies import (
    get_app_settings,
    get_generation_service,
    get_upstream_client,
    verify_app_token,
    verify_origin,
)
from pantry_chef.core.config import Settings
from pantry_chef.core.exceptions import (
    ForbiddenException,
    ServiceUnavailableException,
    UnauthorizedException,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_request() -> MagicMock:
    """Create a mock request with an empty app.state."""
    request = MagicMock()
    request.app.state = MagicMock(spec=[])
    request.headers = {}
    return request


class TestGetAppSettings:
    """Tests for get_app_settings."""

    def test_uses_app_state(self, mock_request: MagicMock) -> None:
        """Should return the settings stored by the factory."""
        settings = Settings()
        mock_request.app.state.settings = settings

        assert get_app_settings(mock_request) is settings

    def test_falls_back_to_global(self, mock_request: MagicMock) -> None:
        """Should fall back to get_settings()."""
        assert get_app_settings(mock_request).APP_ENV == "test"


class TestVerifyOrigin:
    """Tests for verify_origin."""

    async def test_no_origin_header(self, mock_request: MagicMock) -> None:
        """Should allow requests without an Origin header."""
        settings = Settings(ALLOW_ORIGINS=["https://app.example"])

        await verify_origin(mock_request, settings)

    async def test_disallowed_origin(self, mock_request: MagicMock) -> None:
        """Should raise ForbiddenException."""
        mock_request.headers = {"origin": "https://evil.example"}
        settings = Settings(ALLOW_ORIGINS=["https://app.example"])

        with pytest.raises(ForbiddenException):
            await verify_origin(mock_request, settings)

    async def test_empty_allow_list(self, mock_request: MagicMock) -> None:
        """Should allow every origin without an allow-list."""
        mock_request.headers = {"origin": "https://any.example"}

        await verify_origin(mock_request, Settings(ALLOW_ORIGINS=[]))


class TestVerifyAppToken:
    """Tests for verify_app_token."""

    async def test_no_token_configured(self) -> None:
        """Should not require a token when none is configured."""
        await verify_app_token(Settings(APP_TOKEN=""), None)

    @pytest.mark.parametrize("token", [None, "", "wrong", "secret "])
    async def test_wrong_token(self, token: str | None) -> None:
        """Should raise UnauthorizedException."""
        with pytest.raises(UnauthorizedException):
            await verify_app_token(Settings(APP_TOKEN="secret"), token)

    async def test_matching_token(self) -> None:
        """Should accept the configured token."""
        await verify_app_token(Settings(APP_TOKEN="secret"), "secret")


class TestServiceDependencies:
    """Tests for service retrieval from app.state."""

    async def test_generation_service(self, mock_request: MagicMock) -> None:
        """Should return the stored service."""
        service = MagicMock()
        mock_request.app.state.generation_service = service

        assert await get_generation_service(mock_request) is service

    async def test_generation_service_missing(self, mock_request: MagicMock) -> None:
        """Should raise 503 when the service is missing."""
        with pytest.raises(ServiceUnavailableException):
            await get_generation_service(mock_request)

    async def test_upstream_client(self, mock_request: MagicMock) -> None:
        """Should return the stored upstream client."""
        client = MagicMock()
        mock_request.app.state.upstream_client = client

        assert await get_upstream_client(mock_request) is client

    async def test_upstream_client_none(self, mock_request: MagicMock) -> None:
        """Should raise 503 when the upstream client is None."""
        mock_request.app.state.upstream_client = None

        with pytest.raises(ServiceUnavailableException):
            await get_upstream_client(mock_request)
