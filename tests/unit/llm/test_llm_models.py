"""Unit tests for chat-completion models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pantry_chef.llm.models import (
    ChatCompletionResponse,
    ChatMessage,
    LLMCompletionResult,
)
from tests.fixtures.llm_responses import create_chat_response


pytestmark = pytest.mark.unit


class TestChatMessage:
    """Tests for ChatMessage."""

    def test_rejects_unknown_role(self) -> None:
        """Should only accept system, user and assistant roles."""
        with pytest.raises(ValidationError):
            ChatMessage(role="tool", content="x")  # type: ignore[arg-type]


class TestChatCompletionResponseRawText:
    """Tests for ChatCompletionResponse.raw_text."""

    def test_content(self) -> None:
        """Should prefer message content."""
        response = ChatCompletionResponse.model_validate(
            create_chat_response("text", tool_arguments='{"a":1}')
        )

        assert response.raw_text == "text"

    def test_tool_arguments_when_content_empty(self) -> None:
        """Should fall back to the first tool call's arguments."""
        response = ChatCompletionResponse.model_validate(
            create_chat_response(None, tool_arguments='{"a":1}')
        )

        assert response.raw_text == '{"a":1}'

    def test_no_choices(self) -> None:
        """Should return an empty string without choices."""
        assert ChatCompletionResponse().raw_text == ""

    def test_choice_without_message(self) -> None:
        """Should return an empty string when the choice has no message."""
        response = ChatCompletionResponse.model_validate({"choices": [{"index": 0}]})

        assert response.raw_text == ""

    def test_ignores_unknown_fields(self) -> None:
        """Should tolerate extra provider fields."""
        payload = create_chat_response("x")
        payload["system_fingerprint"] = "fp_123"

        assert ChatCompletionResponse.model_validate(payload).raw_text == "x"


class TestLLMCompletionResult:
    """Tests for LLMCompletionResult."""

    def test_from_response(self) -> None:
        """Should copy text, model and usage."""
        response = ChatCompletionResponse.model_validate(
            create_chat_response("hi", prompt_tokens=3, completion_tokens=4)
        )

        result = LLMCompletionResult.from_response(response)

        assert result == LLMCompletionResult(
            raw_response="hi",
            model="gpt-4o-mini",
            prompt_tokens=3,
            completion_tokens=4,
        )

    def test_missing_usage(self) -> None:
        """Should leave token counts unset without usage."""
        response = ChatCompletionResponse.model_validate(
            {"choices": [{"message": {"content": "hi"}}]}
        )

        result = LLMCompletionResult.from_response(response)

        assert result.prompt_tokens is None
        assert result.completion_tokens is None

    def test_is_frozen(self) -> None:
        """Should be immutable."""
        result = LLMCompletionResult(raw_response="x")

        with pytest.raises(ValidationError):
            result.raw_response = "y"  # type: ignore[misc]
