"""LLM client data models.

Request/response models for the OpenAI-compatible chat-completions format.
Response models ignore unknown fields and make nearly everything optional:
the only thing the pipeline needs from a response is the raw text of the
first choice.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Single role-tagged message."""

    role: Literal["system", "user", "assistant"] = Field(
        ..., description="Message role"
    )
    content: str = Field(..., description="Message content")


class ToolFunction(BaseModel):
    """Function declaration offered to the model."""

    name: str
    description: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)


class Tool(BaseModel):
    """Tool entry in a chat request."""

    type: Literal["function"] = "function"
    function: ToolFunction


class ChatCompletionRequest(BaseModel):
    """Request body for ``/chat/completions``."""

    model: str = Field(..., description="Model name (e.g., 'gpt-4o-mini')")
    messages: list[dict[str, Any]] = Field(..., description="Chat messages")
    temperature: float | None = Field(default=None, description="Sampling temperature")
    max_tokens: int | None = Field(default=None, description="Maximum output tokens")
    tools: list[Tool] | None = Field(default=None, description="Offered tools")
    tool_choice: str | dict[str, Any] | None = Field(
        default=None,
        description="'required' forces the model to answer with a tool call",
    )


class ToolCallFunction(BaseModel):
    """Function name and JSON-encoded arguments chosen by the model."""

    name: str | None = None
    arguments: str | None = None


class ToolCall(BaseModel):
    """Tool call emitted by the model."""

    id: str | None = None
    type: str | None = None
    function: ToolCallFunction | None = None


class ChatResponseMessage(BaseModel):
    """Assistant message inside a choice."""

    role: str | None = None
    content: str | None = None
    tool_calls: list[ToolCall] | None = None


class ChatChoice(BaseModel):
    """Single choice in a chat completion."""

    index: int = 0
    message: ChatResponseMessage | None = None
    finish_reason: str | None = None


class ChatUsage(BaseModel):
    """Token usage statistics."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class ChatCompletionResponse(BaseModel):
    """Response from ``/chat/completions``."""

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] = Field(default_factory=list)
    usage: ChatUsage | None = None

    @property
    def raw_text(self) -> str:
        """Raw text of the first choice.

        The message content when non-empty, otherwise the arguments of the
        first tool call. Empty string when neither is present.
        """
        if not self.choices or self.choices[0].message is None:
            return ""
        message = self.choices[0].message
        if message.content:
            return message.content
        for call in message.tool_calls or []:
            if call.function is not None and call.function.arguments:
                return call.function.arguments
        return ""


class LLMCompletionResult(BaseModel):
    """Internal result of a chat completion."""

    raw_response: str = Field(..., description="Raw text returned by the model")
    model: str | None = Field(default=None, description="Model that answered")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_response(cls, response: ChatCompletionResponse) -> LLMCompletionResult:
        """Build a result from a parsed chat completion."""
        usage = response.usage or ChatUsage()
        return cls(
            raw_response=response.raw_text,
            model=response.model,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
        )
