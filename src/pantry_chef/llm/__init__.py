"""LLM integration module.

Chat clients for the hosted text-generation service (direct or through the
token-gated proxy), their wire models and the recipe prompt.
"""

from pantry_chef.llm.client.openai import OpenAIChatClient
from pantry_chef.llm.client.protocol import ChatClientProtocol
from pantry_chef.llm.client.proxy import ProxyChatClient
from pantry_chef.llm.exceptions import (
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from pantry_chef.llm.models import ChatMessage, LLMCompletionResult
from pantry_chef.llm.prompts.base import BasePrompt


__all__ = [
    "BasePrompt",
    "ChatClientProtocol",
    "ChatMessage",
    "LLMCompletionResult",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "OpenAIChatClient",
    "ProxyChatClient",
]
