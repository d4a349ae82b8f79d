"""Application lifespan event handlers.

Startup builds the chat clients and the generation service and stores them
on ``app.state``; shutdown closes the HTTP connections they hold.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from pantry_chef.core.config import LLMProvider, Settings, get_settings
from pantry_chef.llm.client.openai import OpenAIChatClient
from pantry_chef.llm.client.proxy import ProxyChatClient
from pantry_chef.observability.logging import get_logger, setup_logging
from pantry_chef.services.generation import RecipeGenerationService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from pantry_chef.llm.client.protocol import ChatClientProtocol

logger = get_logger(__name__)


def build_upstream_client(settings: Settings) -> OpenAIChatClient | None:
    """Create the direct upstream client, or None when no key is configured."""
    if not settings.OPENAI_API_KEY:
        logger.warning(
            "OPENAI_API_KEY not set - proxy endpoint and direct generation unavailable"
        )
        return None

    openai = settings.llm.openai
    return OpenAIChatClient(
        api_key=settings.OPENAI_API_KEY,
        model=openai.model,
        base_url=openai.url,
        temperature=openai.temperature,
        max_tokens=openai.max_tokens,
        timeout=openai.timeout,
        max_retries=openai.max_retries,
        requests_per_minute=openai.requests_per_minute,
        tool_mode=openai.tool_mode,
    )


def build_chat_client(
    settings: Settings,
    upstream: OpenAIChatClient | None,
) -> ChatClientProtocol | None:
    """Pick the collaborator the generation service talks to."""
    if settings.llm_provider_enum == LLMProvider.PROXY:
        return ProxyChatClient(
            settings.proxy_generate_url,
            app_token=settings.APP_TOKEN,
            model=settings.llm.openai.model,
            temperature=settings.llm.openai.temperature,
            max_tokens=settings.llm.openai.max_tokens,
            timeout=settings.llm.proxy.timeout,
        )
    return upstream


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize logging, chat clients and the generation service."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        provider=settings.llm.provider,
    )

    upstream = build_upstream_client(settings)
    chat_client = build_chat_client(settings, upstream)

    if upstream is not None:
        await upstream.initialize()
    if chat_client is not None and chat_client is not upstream:
        await chat_client.initialize()

    app.state.upstream_client = upstream
    app.state.chat_client = chat_client
    app.state.generation_service = (
        RecipeGenerationService(
            chat_client,
            model=settings.llm.openai.model,
            temperature=settings.llm.openai.temperature,
            max_tokens=settings.llm.openai.max_tokens,
        )
        if chat_client is not None
        else None
    )

    if app.state.generation_service is None:
        logger.warning("No chat client configured - recipe generation unavailable")

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    """Close chat client connections."""
    logger.info("Shutting down application")

    upstream = getattr(app.state, "upstream_client", None)
    chat_client = getattr(app.state, "chat_client", None)

    if chat_client is not None and chat_client is not upstream:
        await chat_client.shutdown()
    if upstream is not None:
        await upstream.shutdown()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Uses the settings stored on ``app.state`` by the factory, falling back
    to the cached global settings.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
