"""FastAPI dependencies.

Access to the services stored on ``app.state`` during startup, plus the
two request gates shared by the generation endpoints: the browser origin
allow-list and the shared app token.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Header, Request

from pantry_chef.core.config import Settings, get_settings
from pantry_chef.core.exceptions import (
    ForbiddenException,
    ServiceUnavailableException,
    UnauthorizedException,
)
from pantry_chef.llm.client.proxy import APP_TOKEN_HEADER
from pantry_chef.observability.logging import get_logger


if TYPE_CHECKING:
    from pantry_chef.llm.client.openai import OpenAIChatClient
    from pantry_chef.services.generation import RecipeGenerationService


logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def verify_origin(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> None:
    """Reject requests whose Origin header is present but not allow-listed.

    Raises:
        ForbiddenException: 403 for a disallowed origin.
    """
    origin = request.headers.get("origin", "")
    if origin and not settings.is_origin_allowed(origin):
        logger.warning("Blocked request from origin", origin=origin)
        raise ForbiddenException


async def verify_app_token(
    settings: Annotated[Settings, Depends(get_app_settings)],
    x_app_token: Annotated[str | None, Header(alias=APP_TOKEN_HEADER)] = None,
) -> None:
    """Require the shared app token when one is configured.

    Raises:
        UnauthorizedException: 401 for a missing or wrong token.
    """
    if not settings.APP_TOKEN:
        return
    if not secrets.compare_digest(
        (x_app_token or "").encode(), settings.APP_TOKEN.encode()
    ):
        raise UnauthorizedException


async def get_generation_service(request: Request) -> RecipeGenerationService:
    """Get the recipe generation service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: RecipeGenerationService | None = getattr(
        request.app.state, "generation_service", None
    )
    if service is None:
        raise ServiceUnavailableException("Recipe generation service not available")
    return service


async def get_upstream_client(request: Request) -> OpenAIChatClient:
    """Get the direct upstream client from app state.

    Raises:
        ServiceUnavailableException: 503 if no upstream key is configured.
    """
    client: OpenAIChatClient | None = getattr(
        request.app.state, "upstream_client", None
    )
    if client is None:
        raise ServiceUnavailableException("Upstream chat service not configured")
    return client


GatedRequest = [Depends(verify_origin), Depends(verify_app_token)]
"""Dependencies applied, in order, to every generation endpoint."""
