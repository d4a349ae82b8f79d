"""Shared test fixtures and configuration for the Pantry Chef service tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest


# Select config/environments/test before any settings are built
os.environ["APP_ENV"] = "test"

from pantry_chef.core.config import Settings, get_settings  # noqa: E402
from pantry_chef.observability.logging import clear_context  # noqa: E402
from pantry_chef.schemas import RecipeRequest  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Clear cached settings and bound log context around every test."""
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the test environment with an upstream key and no gates."""
    return Settings(
        APP_ENV="test",
        OPENAI_API_KEY="sk-test",
        APP_TOKEN="",
        ALLOW_ORIGINS=[],
    )


@pytest.fixture
def recipe_request() -> RecipeRequest:
    """A typical generation request."""
    return RecipeRequest(
        ingredients=["rice", "lemon", "garlic", "butter"],
        cuisine="Mediterranean",
        servings=2,
    )
