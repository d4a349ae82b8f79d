"""LLM prompt templates."""

from pantry_chef.llm.prompts.base import BasePrompt
from pantry_chef.llm.prompts.recipe import REPAIR_DIRECTIVE, RecipeGenerationPrompt


__all__ = [
    "REPAIR_DIRECTIVE",
    "BasePrompt",
    "RecipeGenerationPrompt",
]
