"""Base class for LLM prompts.

Provides a standardized interface for defining chat prompts with:
- A system prompt and a formatted user message
- The schema the answer is expected to follow
- Generation options (temperature, output length)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from pantry_chef.llm.models import ChatMessage

T = TypeVar("T", bound=BaseModel)


class BasePrompt(ABC, Generic[T]):
    """Base class for all chat prompts.

    Example:
        ```python
        class GreetingPrompt(BasePrompt[Greeting]):
            output_schema = Greeting
            system_prompt = "You write greetings as JSON."

            def format(self, name: str) -> str:
                return f"Greet {name}."
        ```
    """

    output_schema: ClassVar[type[BaseModel]]
    """Pydantic model describing the expected answer."""

    system_prompt: ClassVar[str] = ""
    """System message that sets context for the model."""

    temperature: ClassVar[float | None] = None
    """Sampling temperature (None = client default)."""

    max_tokens: ClassVar[int | None] = None
    """Maximum tokens to generate (None = client default)."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the user message from input variables."""
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def system_message(self) -> str:
        """Return the system message content."""
        return self.system_prompt

    def build_messages(self, **kwargs: Any) -> list[ChatMessage]:
        """Return the ordered ``[system, user]`` messages."""
        return [
            ChatMessage(role="system", content=self.system_message()),
            ChatMessage(role="user", content=self.format(**kwargs)),
        ]

    def get_options(self) -> dict[str, Any]:
        """Generation options for this prompt, omitting unset values."""
        options: dict[str, Any] = {}
        if self.temperature is not None:
            options["temperature"] = self.temperature
        if self.max_tokens is not None:
            options["max_tokens"] = self.max_tokens
        return options
