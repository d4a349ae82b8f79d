"""Recipe record schemas.

``RecipeRecord`` is the render-ready output of the generation pipeline.
Every field has a default and every sequence is a list, so a record built
from nothing is still complete. Field aliases are the camelCase keys the
front end reads (``dishType``, ``ingredientsUS``, ...).
"""

from __future__ import annotations

from pydantic import Field

from .base import APIResponse
from .enums import DishType


Number = int | float


class ReasonedIngredient(APIResponse):
    """Ingredient the model chose to use or leave out, with its reason."""

    name: str = Field(..., description="Ingredient name")
    reason: str = Field(default="", description="Why it was selected or omitted")


class IngredientAmount(APIResponse):
    """Ingredient line with an optional quantity."""

    name: str = Field(..., description="Ingredient name")
    amount: str | None = Field(default=None, description="Quantity, e.g. '1 tsp'")
    note: str | None = Field(default=None, description="Preparation note")


class RecipeStep(APIResponse):
    """Single numbered instruction."""

    step: Number = Field(..., description="1-based step number")
    instruction: str = Field(..., description="What to do")
    time: str | None = Field(default=None, description="How long the step takes")
    heat: str | None = Field(default=None, description="Heat level")
    doneness_cue: str | None = Field(
        default=None, description="How to tell the step is done"
    )
    tip: str | None = Field(default=None, description="Step-specific tip")


class Substitution(APIResponse):
    """Ingredient swap suggestion."""

    from_: str = Field(..., alias="from", description="Ingredient to replace")
    to: str = Field(..., description="Replacement")
    note: str | None = Field(default=None, description="Caveats for the swap")


class RecipeRecord(APIResponse):
    """Fully normalized recipe returned to the front end."""

    title: str = Field(default="Untitled")
    summary: str = Field(default="")
    dish_type: str = Field(default=DishType.MAIN.value)
    servings: Number = Field(default=2)
    cuisine: str = Field(default="")
    prep_time: str = Field(default="")
    cook_time: str = Field(default="")
    total_time: str = Field(default="")
    taste_score: Number = Field(default=0)
    simplicity_score: Number = Field(default=0)
    overall_score: Number = Field(default=0)
    selected_ingredients: list[ReasonedIngredient] = Field(default_factory=list)
    omitted_ingredients: list[ReasonedIngredient] = Field(default_factory=list)
    ingredients_us: list[IngredientAmount] = Field(
        default_factory=list, alias="ingredientsUS"
    )
    ingredients_metric: list[IngredientAmount] = Field(default_factory=list)
    steps: list[RecipeStep] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    substitutions: list[Substitution] = Field(default_factory=list)
