"""API schemas."""

from pantry_chef.schemas.base import APIRequest, APIResponse
from pantry_chef.schemas.enums import DishType
from pantry_chef.schemas.generation import RecipeRequest
from pantry_chef.schemas.recipe import (
    IngredientAmount,
    ReasonedIngredient,
    RecipeRecord,
    RecipeStep,
    Substitution,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "DishType",
    "IngredientAmount",
    "ReasonedIngredient",
    "RecipeRecord",
    "RecipeRequest",
    "RecipeStep",
    "Substitution",
]
