"""Normalization of parsed model output into a ``RecipeRecord``.

The parsed object comes from a generative model, so nothing about its
shape is trusted: every field is checked before it is interpreted, every
missing or unusable value falls back to a default, and every list-like
field ends up as a list whatever the model sent (list, lone object,
key/value mapping, scalar or nothing). ``normalize_recipe`` never raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import orjson

from pantry_chef.schemas.enums import DishType
from pantry_chef.schemas.recipe import (
    IngredientAmount,
    Number,
    ReasonedIngredient,
    RecipeRecord,
    RecipeStep,
    Substitution,
)


DEFAULT_TITLE = "Untitled"
DEFAULT_SERVINGS = 2
DEFAULT_SCORE = 0


# =============================================================================
# Scalar coercion
# =============================================================================


def to_text(value: Any, default: str = "") -> str:
    """Coerce ``value`` to a stripped string.

    ``None`` gives ``default``. Booleans render as ``true``/``false``,
    integral floats without a decimal part, and lists/objects as compact
    JSON.
    """
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return orjson.dumps(
                value, default=str, option=orjson.OPT_NON_STR_KEYS
            ).decode()
        except (TypeError, orjson.JSONEncodeError):
            return str(value)
    return str(value).strip()


def _non_blank_text(value: Any, default: str) -> str:
    """Like ``to_text`` but an empty result also falls back to ``default``."""
    return to_text(value) or default


def _optional_text(value: Any) -> str | None:
    """Coerce to text, mapping missing or blank values to ``None``."""
    return to_text(value) or None


def to_number(value: Any, default: Number) -> Number:
    """Coerce ``value`` to a finite number, else return ``default``.

    Numbers pass through, booleans count as 1/0 and numeric strings are
    parsed. Anything else (including blank and non-numeric strings, NaN and
    infinities) yields ``default``. Integral results are returned as ``int``.
    """
    if value is None:
        return default

    number: float
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


# =============================================================================
# List coercion
# =============================================================================


def as_list(value: Any) -> list[Any]:
    """Coerce a list-like field into a list.

    Lists (and tuples) pass through, a lone object becomes a one-element
    list, and everything else (``None``, strings, numbers) becomes ``[]``.
    """
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, Mapping):
        return [value]
    return []


def _to_reasoned_ingredients(value: Any) -> list[ReasonedIngredient]:
    items: list[ReasonedIngredient] = []
    for entry in as_list(value):
        if isinstance(entry, str):
            name, reason = entry.strip(), ""
        elif isinstance(entry, Mapping):
            name, reason = to_text(entry.get("name")), to_text(entry.get("reason"))
        else:
            continue
        if name:
            items.append(ReasonedIngredient(name=name, reason=reason))
    return items


def _ingredient_entries(value: Any) -> list[Any]:
    """Expand an ingredient field into entries.

    Key/value mappings (``{"salt": "1 tsp"}``) become ``(name, value)``
    pairs; a lone object with a ``name`` key is a single entry.
    """
    if isinstance(value, Mapping) and "name" not in value:
        return list(value.items())
    return as_list(value)


def _to_ingredient_amounts(value: Any) -> list[IngredientAmount]:
    items: list[IngredientAmount] = []
    for entry in _ingredient_entries(value):
        amount: str | None = None
        note: str | None = None
        if isinstance(entry, tuple):
            if len(entry) != 2:
                continue
            key, detail = entry
            name = to_text(key)
            if isinstance(detail, Mapping):
                amount = _optional_text(detail.get("amount"))
                note = _optional_text(detail.get("note"))
            else:
                amount = _optional_text(detail)
        elif isinstance(entry, str):
            name = entry.strip()
        elif isinstance(entry, Mapping):
            name = to_text(entry.get("name"))
            amount = _optional_text(entry.get("amount"))
            note = _optional_text(entry.get("note"))
        else:
            continue
        if name:
            items.append(IngredientAmount(name=name, amount=amount, note=note))
    return items


def _to_steps(value: Any) -> list[RecipeStep]:
    steps: list[RecipeStep] = []
    for entry in as_list(value):
        position = len(steps) + 1
        if isinstance(entry, str):
            instruction = entry.strip()
            if instruction:
                steps.append(RecipeStep(step=position, instruction=instruction))
            continue
        if not isinstance(entry, Mapping):
            continue
        instruction = to_text(entry.get("instruction"))
        if not instruction:
            continue
        steps.append(
            RecipeStep(
                step=to_number(entry.get("step"), position),
                instruction=instruction,
                time=_optional_text(entry.get("time")),
                heat=_optional_text(entry.get("heat")),
                doneness_cue=_optional_text(entry.get("donenessCue")),
                tip=_optional_text(entry.get("tip")),
            )
        )
    return steps


def _to_substitutions(value: Any) -> list[Substitution]:
    items: list[Substitution] = []
    for entry in as_list(value):
        if not isinstance(entry, Mapping):
            continue
        source = to_text(entry.get("from"))
        target = to_text(entry.get("to"))
        if source and target:
            items.append(
                Substitution(
                    from_=source, to=target, note=_optional_text(entry.get("note"))
                )
            )
    return items


def _to_strings(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [text for text in (to_text(item) for item in value) if text]


# =============================================================================
# Record
# =============================================================================


def normalize_recipe(obj: Any, *, cuisine: str = "") -> RecipeRecord:
    """Build a complete ``RecipeRecord`` from an object of unknown shape.

    Args:
        obj: Parsed model output. Anything that is not a mapping is treated
            as an empty object.
        cuisine: Cuisine the user asked for; used when the model gives none.

    Returns:
        A record with every field present and every sequence a list.
    """
    data: Mapping[str, Any] = obj if isinstance(obj, Mapping) else {}

    return RecipeRecord(
        title=_non_blank_text(data.get("title"), DEFAULT_TITLE),
        summary=to_text(data.get("summary")),
        dish_type=_non_blank_text(data.get("dishType"), DishType.MAIN.value),
        servings=to_number(data.get("servings"), DEFAULT_SERVINGS),
        cuisine=_non_blank_text(data.get("cuisine"), cuisine.strip()),
        prep_time=to_text(data.get("prepTime")),
        cook_time=to_text(data.get("cookTime")),
        total_time=to_text(data.get("totalTime")),
        taste_score=to_number(data.get("tasteScore"), DEFAULT_SCORE),
        simplicity_score=to_number(data.get("simplicityScore"), DEFAULT_SCORE),
        overall_score=to_number(data.get("overallScore"), DEFAULT_SCORE),
        selected_ingredients=_to_reasoned_ingredients(data.get("selectedIngredients")),
        omitted_ingredients=_to_reasoned_ingredients(data.get("omittedIngredients")),
        ingredients_us=_to_ingredient_amounts(data.get("ingredientsUS")),
        ingredients_metric=_to_ingredient_amounts(data.get("ingredientsMetric")),
        steps=_to_steps(data.get("steps")),
        tips=_to_strings(data.get("tips")),
        notes=_to_strings(data.get("notes")),
        substitutions=_to_substitutions(data.get("substitutions")),
    )
