"""LLM client exceptions.

Raised by the chat clients and caught by the generation service, which
turns any of them into a single repair attempt.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for LLM client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the LLM service cannot be reached.

    Covers connection errors and exhausted transport retries.
    """


class LLMTimeoutError(LLMUnavailableError):
    """Raised when an LLM request times out."""


class LLMResponseError(LLMError):
    """Raised when the LLM service answers but the answer is unusable.

    Covers non-2xx statuses and bodies that are not a chat completion.
    ``status_code`` and ``detail`` carry the upstream status and body text
    when there was one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class LLMRateLimitError(LLMResponseError):
    """Raised when the LLM service rate limits the request (HTTP 429)."""


class LLMConfigurationError(LLMError):
    """Raised when the LLM client is misconfigured."""
