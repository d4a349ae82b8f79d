"""Root endpoint providing service information."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pantry_chef.api.dependencies import get_app_settings
from pantry_chef.core.config import Settings


router = APIRouter(tags=["Root"])


class RootResponse(BaseModel):
    """Basic service information for discovery."""

    service: str
    version: str
    status: str
    docs: str
    health: str


@router.get(
    "/",
    response_model=RootResponse,
    summary="Root endpoint",
    description="Root endpoint providing basic service information.",
)
async def root(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RootResponse:
    """Return basic service information."""
    prefix = settings.api.v1_prefix
    return RootResponse(
        service=settings.app.name,
        version=settings.app.version,
        status="operational",
        docs=f"{prefix}/docs" if settings.is_non_production else "disabled",
        health=f"{prefix}/health",
    )
