"""Recipe generation service package.

Turns a user's ingredients into a normalized recipe through the chat
collaborator, with a single repair attempt on unparseable output.
"""

from pantry_chef.services.generation.diagnostics import (
    GenerationDiagnostics,
    LoggingDiagnostics,
)
from pantry_chef.services.generation.exceptions import RecipeGenerationError
from pantry_chef.services.generation.service import (
    GenerationRun,
    GenerationState,
    RecipeGenerationService,
)


__all__ = [
    "GenerationDiagnostics",
    "GenerationRun",
    "GenerationState",
    "LoggingDiagnostics",
    "RecipeGenerationError",
    "RecipeGenerationService",
]
