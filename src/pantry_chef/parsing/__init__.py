"""Model-output parsing: JSON extraction and recipe normalization."""

from pantry_chef.parsing.exceptions import (
    EmptyResponseError,
    NoJsonFoundError,
    RecipeParseError,
    RecipeParsingError,
)
from pantry_chef.parsing.extraction import (
    extract_json,
    parse_json_object,
    strip_code_fences,
)
from pantry_chef.parsing.normalization import normalize_recipe


__all__ = [
    "EmptyResponseError",
    "NoJsonFoundError",
    "RecipeParseError",
    "RecipeParsingError",
    "extract_json",
    "normalize_recipe",
    "parse_json_object",
    "strip_code_fences",
]
