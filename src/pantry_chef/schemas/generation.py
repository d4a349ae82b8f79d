"""Recipe generation request schema."""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import APIRequest
from .enums import DishType


class RecipeRequest(APIRequest):
    """What the user has on hand and what they want to make."""

    ingredients: list[str] = Field(
        ...,
        min_length=1,
        description="Available ingredients, one per entry",
        examples=[["rice", "lemon", "garlic", "butter"]],
    )
    cuisine: str = Field(default="", max_length=60, description="Preferred cuisine")
    dish_type: DishType = Field(default=DishType.MAIN, description="Kind of dish")
    servings: int = Field(default=2, ge=1, le=24, description="Number of servings")
    dietary: list[str] = Field(
        default_factory=list,
        description="Dietary constraints, e.g. 'vegetarian', 'no nuts'",
    )
    max_time_minutes: int | None = Field(
        default=None, ge=5, le=600, description="Upper bound on total time"
    )
    notes: str = Field(default="", max_length=500, description="Free-form wishes")

    @field_validator("ingredients", "dietary")
    @classmethod
    def _strip_blank_entries(cls, value: list[str]) -> list[str]:
        cleaned = [item.strip() for item in value if item and item.strip()]
        return cleaned

    @field_validator("ingredients")
    @classmethod
    def _require_an_ingredient(cls, value: list[str]) -> list[str]:
        if not value:
            msg = "At least one non-blank ingredient is required"
            raise ValueError(msg)
        return value
