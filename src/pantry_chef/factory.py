"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application from settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts the API router
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from pantry_chef.api.v1.router import router as v1_router
from pantry_chef.core.config import Settings, get_settings
from pantry_chef.core.events import lifespan
from pantry_chef.core.exceptions import setup_exception_handlers
from pantry_chef.core.middleware import LoggingMiddleware, RequestIDMiddleware
from pantry_chef.llm.client.proxy import APP_TOKEN_HEADER
from pantry_chef.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    prefix = settings.api.v1_prefix
    docs_enabled = settings.is_non_production

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Pantry Chef - recipes generated from the ingredients you have",
        lifespan=lifespan,
        docs_url=f"{prefix}/docs" if docs_enabled else None,
        redoc_url=f"{prefix}/redoc" if docs_enabled else None,
        openapi_url=f"{prefix}/openapi.json" if docs_enabled else None,
        default_response_class=ORJSONResponse,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes and lifespan
    app.state.settings = settings

    setup_exception_handlers(app)

    # Middleware order matters - first added = last executed
    _setup_middleware(app, settings)

    app.include_router(v1_router, prefix=prefix)

    # After routes are mounted
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. RequestIDMiddleware (adds request ID)
    2. LoggingMiddleware (logs requests/responses)
    3. CORSMiddleware (answers preflights, adds CORS headers)
    """
    prefix = settings.api.v1_prefix

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS or ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["content-type", APP_TOKEN_HEADER],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={f"{prefix}/health", f"{prefix}/ready", f"{prefix}/metrics"},
    )

    app.add_middleware(RequestIDMiddleware)
