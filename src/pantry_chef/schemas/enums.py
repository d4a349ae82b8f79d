"""Enumerations shared by request and response schemas."""

from __future__ import annotations

from enum import StrEnum


class DishType(StrEnum):
    """Kind of dish the user asks for.

    Recipes coming back from the model are not validated against this set;
    ``RecipeRecord.dish_type`` is a plain string.
    """

    MAIN = "main"
    SIDE = "side"
    SNACK_SALAD = "snack/salad"
    DRESSING = "dressing"
    SAUCE = "sauce"
    SPICE_BLEND = "spice-blend"
