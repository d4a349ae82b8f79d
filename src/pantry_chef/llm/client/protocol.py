"""Chat client protocol.

The generation service depends only on this interface, so the direct
upstream client and the proxy client are interchangeable (and trivially
faked in tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_chef.llm.models import ChatMessage, LLMCompletionResult


@runtime_checkable
class ChatClientProtocol(Protocol):
    """Protocol for chat-completion collaborators."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMCompletionResult:
        """Send role-tagged messages and return the raw model text.

        Args:
            messages: Ordered system/user messages.
            model: Model override (uses client default if None).
            temperature: Sampling temperature override.
            max_tokens: Output length override.

        Returns:
            LLMCompletionResult whose ``raw_response`` is the unparsed text.

        Raises:
            LLMUnavailableError: Service unreachable.
            LLMTimeoutError: Request timed out.
            LLMResponseError: Non-2xx status or a body that is not a completion.
        """
        ...
