"""Recipe generation prompt.

Builds the ``[system, user]`` messages for one recipe, and the amended
messages used for the single repair attempt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pantry_chef.llm.models import ChatMessage
from pantry_chef.schemas.enums import DishType
from pantry_chef.schemas.recipe import RecipeRecord

from .base import BasePrompt


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_chef.schemas.generation import RecipeRequest


REPAIR_DIRECTIVE = (
    "Your previous reply could not be parsed. Resend the same recipe as ONE "
    "compact JSON object. No prose before or after it, no Markdown code fences, "
    "and make sure the object is complete and ends with its closing brace '}'."
)

_SHAPE_HINT = """\
Field shapes:
- selectedIngredients, omittedIngredients: [{"name": str, "reason": str}]
- ingredientsUS, ingredientsMetric: [{"name": str, "amount": str, "note": str}]
- steps: [{"step": int, "instruction": str, "time": str, "heat": str, \
"donenessCue": str, "tip": str}]
- tips, notes: [str]
- substitutions: [{"from": str, "to": str, "note": str}]
- tasteScore, simplicityScore, overallScore: numbers from 0 to 10
- dishType: one of {dish_types}"""


def _record_keys() -> str:
    return ", ".join(
        field.alias or name for name, field in RecipeRecord.model_fields.items()
    )


class RecipeGenerationPrompt(BasePrompt[RecipeRecord]):
    """Prompt asking for one recipe built from the user's ingredients."""

    output_schema = RecipeRecord

    system_prompt: ClassVar[str] = (
        "You are a practical home cook. Using mostly the ingredients the user "
        "has, write ONE recipe. You may leave ingredients out when they do not "
        "fit, and you may assume basic pantry staples (salt, pepper, oil, water). "
        "Reply with a single JSON object and nothing else."
    )

    temperature: ClassVar[float | None] = 0.3
    max_tokens: ClassVar[int | None] = 1500

    def system_message(self) -> str:
        """System prompt followed by the expected keys and their shapes."""
        dish_types = ", ".join(d.value for d in DishType)
        return (
            f"{self.system_prompt}\n\n"
            f"Keys: {_record_keys()}.\n"
            f"{_SHAPE_HINT.replace('{dish_types}', dish_types)}"
        )

    def format(self, request: RecipeRequest) -> str:
        """Describe the user's ingredients and constraints."""
        lines = [f"Ingredients I have: {', '.join(request.ingredients)}."]
        lines.append(f"Dish type: {request.dish_type}.")
        if request.cuisine:
            lines.append(f"Cuisine: {request.cuisine}.")
        lines.append(f"Servings: {request.servings}.")
        if request.dietary:
            lines.append(f"Dietary constraints: {', '.join(request.dietary)}.")
        if request.max_time_minutes is not None:
            lines.append(f"Total time must be at most {request.max_time_minutes} minutes.")
        if request.notes:
            lines.append(f"Notes: {request.notes}")
        return "\n".join(lines)

    def with_repair(self, messages: Sequence[ChatMessage]) -> list[ChatMessage]:
        """Return a copy of ``messages`` with the repair directive appended.

        The directive goes at the end of the system message; if there is no
        system message one is prepended. ``messages`` is left untouched.
        """
        repaired: list[ChatMessage] = []
        amended = False
        for message in messages:
            if message.role == "system" and not amended:
                content = f"{message.content}\n\n{REPAIR_DIRECTIVE}"
                repaired.append(message.model_copy(update={"content": content}))
                amended = True
            else:
                repaired.append(message)
        if not amended:
            repaired.insert(0, ChatMessage(role="system", content=REPAIR_DIRECTIVE))
        return repaired
