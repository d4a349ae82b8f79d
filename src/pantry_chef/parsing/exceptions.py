"""Parsing exceptions.

Raised while turning raw model text into a JSON object. Each carries the
untouched raw text so the caller can log what the model actually said.
"""

from __future__ import annotations


class RecipeParsingError(Exception):
    """Base exception for model-output parsing errors."""

    def __init__(self, message: str, raw: str | None = None) -> None:
        self.raw = raw
        super().__init__(message)


class EmptyResponseError(RecipeParsingError):
    """Raised when the model returned no text at all."""

    def __init__(self, raw: str | None = None) -> None:
        super().__init__("The model returned an empty response", raw)


class NoJsonFoundError(RecipeParsingError):
    """Raised when no parseable JSON object exists in the text.

    Fence stripping, the direct parse, the brace-aware scan and truncation
    repair have all been tried.
    """

    def __init__(self, raw: str | None = None) -> None:
        super().__init__("Could not find a JSON recipe in the model response", raw)


class RecipeParseError(RecipeParsingError):
    """Raised when extracted text does not decode to a JSON object."""
