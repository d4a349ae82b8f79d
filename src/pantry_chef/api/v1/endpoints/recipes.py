"""Recipe generation endpoint.

Runs the full pipeline server-side: prompt, chat completion, extraction,
normalization and at most one repair round, returning a render-ready
recipe record.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from pantry_chef.api.dependencies import GatedRequest, get_generation_service
from pantry_chef.core.exceptions import RecipeGenerationFailedException
from pantry_chef.schemas import RecipeRecord, RecipeRequest
from pantry_chef.services.generation import (
    RecipeGenerationError,
    RecipeGenerationService,
)


router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post(
    "/generate",
    response_model=RecipeRecord,
    response_model_exclude_none=True,
    summary="Generate a recipe",
    description=(
        "Generate a recipe from the ingredients on hand. Malformed model "
        "output is retried once with a JSON-only reminder."
    ),
    dependencies=GatedRequest,
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Missing or wrong app token"},
        status.HTTP_403_FORBIDDEN: {"description": "Origin not allowed"},
        status.HTTP_502_BAD_GATEWAY: {"description": "Both attempts failed"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "No chat client configured"},
    },
)
async def generate_recipe(
    body: RecipeRequest,
    service: Annotated[RecipeGenerationService, Depends(get_generation_service)],
) -> RecipeRecord:
    """Generate one normalized recipe."""
    try:
        return await service.generate(body)
    except RecipeGenerationError as e:
        raise RecipeGenerationFailedException(str(e)) from e
