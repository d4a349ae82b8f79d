"""Unit tests for recipe normalization.

Tests cover:
- Scalar and number coercion
- List coercion for every list-shaped field
- Dropping entries that fail their required-field check
- Step numbering
- Totality: normalize_recipe never raises
"""

from __future__ import annotations

import math
from typing import Any

import pytest

from pantry_chef.parsing.normalization import (
    as_list,
    normalize_recipe,
    to_number,
    to_text,
)
from pantry_chef.schemas import RecipeRecord
from tests.fixtures.llm_responses import LEMON_RICE


pytestmark = pytest.mark.unit


DEFAULT_RECORD: dict[str, Any] = {
    "title": "Untitled",
    "summary": "",
    "dishType": "main",
    "servings": 2,
    "cuisine": "",
    "prepTime": "",
    "cookTime": "",
    "totalTime": "",
    "tasteScore": 0,
    "simplicityScore": 0,
    "overallScore": 0,
    "selectedIngredients": [],
    "omittedIngredients": [],
    "ingredientsUS": [],
    "ingredientsMetric": [],
    "steps": [],
    "tips": [],
    "notes": [],
    "substitutions": [],
}


def _dump(record: RecipeRecord) -> dict[str, Any]:
    return record.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Scalar coercion
# =============================================================================


class TestToText:
    """Tests for to_text."""

    def test_none_gives_default(self) -> None:
        """Should return the default for None."""
        assert to_text(None, "fallback") == "fallback"

    def test_strips_strings(self) -> None:
        """Should trim whitespace."""
        assert to_text("  soup \n") == "soup"

    def test_integral_float(self) -> None:
        """Should render 2.0 as '2'."""
        assert to_text(2.0) == "2"

    def test_non_integral_float(self) -> None:
        """Should keep the decimal part."""
        assert to_text(1.5) == "1.5"

    def test_int(self) -> None:
        """Should stringify integers."""
        assert to_text(15) == "15"

    def test_bool(self) -> None:
        """Should render booleans in lower case."""
        assert to_text(True) == "true"
        assert to_text(False) == "false"

    def test_object_as_json(self) -> None:
        """Should render objects as compact JSON."""
        assert to_text({"qty": 1, "unit": "cup"}) == '{"qty":1,"unit":"cup"}'

    def test_list_as_json(self) -> None:
        """Should render lists as compact JSON."""
        assert to_text([1, "a"]) == '[1,"a"]'


class TestToNumber:
    """Tests for to_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (7, 7),
            (7.5, 7.5),
            (8.0, 8),
            ("9", 9),
            (" 6.5 ", 6.5),
            ("1e1", 10),
            (True, 1),
            (False, 0),
        ],
    )
    def test_numeric_values(self, value: Any, expected: float) -> None:
        """Should coerce numeric-looking values."""
        assert to_number(value, 0) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "nine", "7/10", [], {}, math.nan, math.inf, "NaN", "-inf"],
    )
    def test_non_numeric_values_give_default(self, value: Any) -> None:
        """Should fall back to the default."""
        assert to_number(value, 3) == 3

    def test_integral_results_are_ints(self) -> None:
        """Should return int for integral values."""
        assert isinstance(to_number("4.0", 0), int)


class TestAsList:
    """Tests for as_list."""

    def test_list_passes_through(self) -> None:
        """Should return lists unchanged."""
        value = [1, 2]
        assert as_list(value) is value

    def test_lone_object_is_wrapped(self) -> None:
        """Should wrap a single object."""
        assert as_list({"name": "salt"}) == [{"name": "salt"}]

    @pytest.mark.parametrize("value", [None, "text", 3, True])
    def test_scalars_give_empty_list(self, value: Any) -> None:
        """Should collapse anything else to an empty list."""
        assert as_list(value) == []


# =============================================================================
# normalize_recipe
# =============================================================================


class TestNormalizeRecipeTotality:
    """normalize_recipe never raises and always returns a full record."""

    @pytest.mark.parametrize(
        "obj",
        [
            {},
            None,
            "a string",
            42,
            [],
            {"steps": "not an array"},
            {"ingredientsUS": {"salt": "1 tsp"}},
            {"title": None, "tips": None, "substitutions": None},
            {"steps": [None, 3, [], {"instruction": None}]},
            {"selectedIngredients": 5, "notes": {"a": 1}},
        ],
    )
    def test_never_raises(self, obj: Any) -> None:
        """Should return a RecipeRecord for any input."""
        record = normalize_recipe(obj)

        assert isinstance(record, RecipeRecord)
        for key in (
            "selectedIngredients",
            "omittedIngredients",
            "ingredientsUS",
            "ingredientsMetric",
            "steps",
            "tips",
            "notes",
            "substitutions",
        ):
            assert isinstance(_dump(record)[key], list)

    def test_empty_object_gives_defaults(self) -> None:
        """Should fill every field with its default."""
        assert _dump(normalize_recipe({})) == DEFAULT_RECORD

    def test_non_object_treated_as_empty(self) -> None:
        """Should treat null as an empty object."""
        assert _dump(normalize_recipe(None)) == DEFAULT_RECORD

    def test_is_deterministic(self) -> None:
        """Should give equal output for equal input."""
        assert normalize_recipe(LEMON_RICE) == normalize_recipe(LEMON_RICE)

    def test_does_not_mutate_input(self) -> None:
        """Should leave the parsed object untouched."""
        obj = {"ingredientsUS": {"salt": "1 tsp"}, "steps": [{"instruction": "x"}]}
        normalize_recipe(obj)
        assert obj == {"ingredientsUS": {"salt": "1 tsp"}, "steps": [{"instruction": "x"}]}


class TestNormalizeRecipeScalars:
    """Tests for scalar fields."""

    def test_well_formed_object(self) -> None:
        """Should carry every well-formed field through."""
        record = normalize_recipe(LEMON_RICE)

        assert record.title == "Lemon Garlic Rice"
        assert record.dish_type == "side"
        assert record.servings == 2
        assert record.prep_time == "5 min"
        assert record.overall_score == 8.5

    def test_blank_title_falls_back(self) -> None:
        """Should use the default title for a blank one."""
        assert normalize_recipe({"title": "   "}).title == "Untitled"

    def test_unknown_dish_type_passes_through(self) -> None:
        """Should not validate dishType against the known values."""
        assert normalize_recipe({"dishType": "dessert"}).dish_type == "dessert"

    def test_cuisine_falls_back_to_context(self) -> None:
        """Should use the requested cuisine when the model gives none."""
        assert normalize_recipe({}, cuisine="Thai").cuisine == "Thai"

    def test_model_cuisine_wins(self) -> None:
        """Should prefer the model's cuisine over the requested one."""
        record = normalize_recipe({"cuisine": "Greek"}, cuisine="Thai")
        assert record.cuisine == "Greek"

    def test_numeric_time_is_stringified(self) -> None:
        """Should stringify numeric time values."""
        assert normalize_recipe({"cookTime": 20}).cook_time == "20"

    def test_scores_are_coerced(self) -> None:
        """Should coerce numeric strings and default non-numeric scores."""
        record = normalize_recipe({"tasteScore": "7", "simplicityScore": "nine"})

        assert record.taste_score == 7
        assert record.simplicity_score == 0

    def test_servings_default(self) -> None:
        """Should default servings to 2."""
        assert normalize_recipe({"servings": "a few"}).servings == 2


class TestNormalizeRecipeIngredients:
    """Tests for ingredient list fields."""

    def test_mapping_is_coerced_to_list(self) -> None:
        """Should turn a name->amount mapping into entries."""
        record = normalize_recipe({"ingredientsUS": {"paprika": "1 tsp"}})

        assert _dump(record)["ingredientsUS"] == [{"name": "paprika", "amount": "1 tsp"}]

    def test_mapping_preserves_order(self) -> None:
        """Should keep the mapping's key order."""
        record = normalize_recipe({"ingredientsMetric": {"rice": "200 g", "salt": 2}})

        assert [(i.name, i.amount) for i in record.ingredients_metric] == [
            ("rice", "200 g"),
            ("salt", "2"),
        ]

    def test_mapping_with_detail_objects(self) -> None:
        """Should read amount and note from nested objects."""
        record = normalize_recipe(
            {"ingredientsUS": {"garlic": {"amount": "2 cloves", "note": "minced"}}}
        )

        assert _dump(record)["ingredientsUS"] == [
            {"name": "garlic", "amount": "2 cloves", "note": "minced"}
        ]

    def test_bare_strings_are_names(self) -> None:
        """Should accept bare strings with no amount."""
        record = normalize_recipe({"ingredientsUS": ["salt", "pepper"]})

        assert _dump(record)["ingredientsUS"] == [{"name": "salt"}, {"name": "pepper"}]

    def test_lone_object_is_wrapped(self) -> None:
        """Should wrap a single ingredient object."""
        record = normalize_recipe({"ingredientsUS": {"name": "rice", "amount": "1 cup"}})

        assert _dump(record)["ingredientsUS"] == [{"name": "rice", "amount": "1 cup"}]

    def test_entries_without_name_are_dropped(self) -> None:
        """Should drop entries with no name."""
        record = normalize_recipe(
            {"ingredientsUS": [{"amount": "1 cup"}, {"name": ""}, 7, {"name": "oil"}]}
        )

        assert [i.name for i in record.ingredients_us] == ["oil"]

    def test_numeric_amount_is_stringified(self) -> None:
        """Should stringify numeric amounts."""
        record = normalize_recipe({"ingredientsUS": [{"name": "eggs", "amount": 2}]})

        assert record.ingredients_us[0].amount == "2"

    def test_tuples_that_are_not_pairs_are_skipped(self) -> None:
        """Should skip tuple entries that are not name/amount pairs."""
        record = normalize_recipe(
            {"ingredientsUS": [("rice", "1 cup", "rinsed"), ("salt",), ("oil", "1 tbsp")]}
        )

        assert [(i.name, i.amount) for i in record.ingredients_us] == [
            ("oil", "1 tbsp")
        ]

    def test_reasoned_ingredients(self) -> None:
        """Should keep name and reason and drop nameless entries."""
        record = normalize_recipe(
            {
                "selectedIngredients": [
                    {"name": "lemon", "reason": "acidity"},
                    {"reason": "no name"},
                    "garlic",
                ],
                "omittedIngredients": {"name": "ketchup", "reason": "does not fit"},
            }
        )

        assert _dump(record)["selectedIngredients"] == [
            {"name": "lemon", "reason": "acidity"},
            {"name": "garlic", "reason": ""},
        ]
        assert _dump(record)["omittedIngredients"] == [
            {"name": "ketchup", "reason": "does not fit"}
        ]


class TestNormalizeRecipeSteps:
    """Tests for step normalization."""

    def test_empty_instructions_are_dropped(self) -> None:
        """Should drop steps with no instruction and number the rest from 1."""
        record = normalize_recipe({"steps": [{"instruction": ""}, {"instruction": "stir"}]})

        assert _dump(record)["steps"] == [{"step": 1, "instruction": "stir"}]

    def test_explicit_step_numbers_are_kept(self) -> None:
        """Should keep the model's step number when given."""
        record = normalize_recipe(
            {"steps": [{"step": 3, "instruction": "a"}, {"step": "4", "instruction": "b"}]}
        )

        assert [s.step for s in record.steps] == [3, 4]

    def test_missing_step_numbers_default_to_position(self) -> None:
        """Should number steps by position when omitted."""
        record = normalize_recipe(
            {"steps": [{"instruction": "a"}, {"instruction": "b", "step": None}]}
        )

        assert [s.step for s in record.steps] == [1, 2]

    def test_bare_string_steps(self) -> None:
        """Should accept plain strings as instructions."""
        record = normalize_recipe({"steps": ["Boil water", "  ", "Add pasta"]})

        assert _dump(record)["steps"] == [
            {"step": 1, "instruction": "Boil water"},
            {"step": 2, "instruction": "Add pasta"},
        ]

    def test_optional_step_fields(self) -> None:
        """Should carry time, heat, doneness cue and tip."""
        record = normalize_recipe(
            {
                "steps": {
                    "instruction": "Sear",
                    "time": "3 min",
                    "heat": "high",
                    "donenessCue": "deep brown crust",
                    "tip": "",
                }
            }
        )

        assert _dump(record)["steps"] == [
            {
                "step": 1,
                "instruction": "Sear",
                "time": "3 min",
                "heat": "high",
                "donenessCue": "deep brown crust",
            }
        ]

    def test_non_array_steps(self) -> None:
        """Should collapse a string steps field to an empty list."""
        assert normalize_recipe({"steps": "not an array"}).steps == []


class TestNormalizeRecipeOtherLists:
    """Tests for substitutions and string lists."""

    def test_substitutions_require_from_and_to(self) -> None:
        """Should drop substitutions missing either side."""
        record = normalize_recipe(
            {
                "substitutions": [
                    {"from": "butter", "to": "olive oil", "note": "less rich"},
                    {"from": "cream"},
                    {"to": "yogurt"},
                ]
            }
        )

        assert _dump(record)["substitutions"] == [
            {"from": "butter", "to": "olive oil", "note": "less rich"}
        ]

    def test_string_lists_are_stringified(self) -> None:
        """Should stringify each element and skip empty ones."""
        record = normalize_recipe({"tips": ["Salt early", 3, None, ""], "notes": []})

        assert record.tips == ["Salt early", "3"]
        assert record.notes == []

    def test_string_list_scalar_gives_empty_list(self) -> None:
        """Should collapse a non-array tips field to an empty list."""
        assert normalize_recipe({"tips": "just one tip"}).tips == []
