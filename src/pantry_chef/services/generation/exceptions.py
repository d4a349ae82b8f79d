"""Exceptions for the recipe generation service."""

from __future__ import annotations


class RecipeGenerationError(Exception):
    """Raised when both the primary and the repair attempt failed.

    The message is the primary attempt's message when it has one, since the
    first failure usually says more about what went wrong.
    """

    def __init__(
        self,
        message: str,
        *,
        primary_error: Exception | None = None,
        repair_error: Exception | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable message, suitable for display.
            primary_error: Failure of the first attempt.
            repair_error: Failure of the repair attempt.
        """
        self.primary_error = primary_error
        self.repair_error = repair_error
        super().__init__(message)
