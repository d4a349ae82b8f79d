"""Diagnostics sink for the generation service.

The service reports failed attempts (with the raw text the model sent)
through this interface instead of logging directly, so tests can inspect
what was reported without capturing log output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pantry_chef.observability.logging import get_logger
from pantry_chef.services.generation.constants import DIAGNOSTIC_RAW_LIMIT


if TYPE_CHECKING:
    from pantry_chef.services.generation.exceptions import RecipeGenerationError


logger = get_logger(__name__)


@runtime_checkable
class GenerationDiagnostics(Protocol):
    """Receives failure details from the generation service."""

    def attempt_failed(
        self,
        *,
        attempt: int,
        error: Exception,
        raw_response: str | None,
    ) -> None:
        """Called when a single attempt fails and will be repaired or reported."""
        ...

    def generation_failed(self, error: RecipeGenerationError) -> None:
        """Called once when the final attempt has failed."""
        ...


class LoggingDiagnostics:
    """Default diagnostics: structured Loguru records."""

    def attempt_failed(
        self,
        *,
        attempt: int,
        error: Exception,
        raw_response: str | None,
    ) -> None:
        """Log the failure and the offending raw text."""
        logger.warning(
            "Recipe generation attempt failed",
            attempt=attempt,
            error_type=type(error).__name__,
            error=str(error),
            raw_response=(raw_response or "")[:DIAGNOSTIC_RAW_LIMIT],
        )

    def generation_failed(self, error: RecipeGenerationError) -> None:
        """Log the final failure with both causes."""
        logger.error(
            "Recipe generation failed after repair attempt",
            error=str(error),
            primary_error=repr(error.primary_error),
            repair_error=repr(error.repair_error),
        )
