"""HTTP client for the token-gated ``/generate`` proxy.

This is the collaborator a browser-facing deployment uses: it never holds
the upstream key, only the shared app token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import orjson

from pantry_chef.llm.client.openai import parse_completion
from pantry_chef.llm.exceptions import (
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from pantry_chef.llm.models import LLMCompletionResult
from pantry_chef.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_chef.llm.models import ChatMessage


logger = get_logger(__name__)

APP_TOKEN_HEADER = "x-app-token"


class ProxyChatClient:
    """Calls the proxy endpoint with role-tagged messages."""

    def __init__(
        self,
        url: str,
        *,
        app_token: str = "",
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int | None = None,
        timeout: float = 60.0,
    ) -> None:
        self.url = url
        self.app_token = app_token
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._http_client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Create the HTTP client, sending the app token when configured."""
        if self._http_client is not None:
            return

        headers = {"content-type": "application/json"}
        if self.app_token:
            headers[APP_TOKEN_HEADER] = self.app_token

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=headers,
        )
        logger.info("ProxyChatClient initialized", url=self.url)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMCompletionResult:
        """POST the messages to the proxy and return the raw model text.

        Raises:
            LLMTimeoutError: If the proxy does not answer in time.
            LLMUnavailableError: If the proxy cannot be reached.
            LLMResponseError: On a non-2xx status or a malformed body.
        """
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        body = {
            "model": model or self.model,
            "temperature": self.temperature if temperature is None else temperature,
            "max_tokens": self.max_tokens if max_tokens is None else max_tokens,
            "messages": [m.model_dump() for m in messages],
        }

        try:
            response = await self._http_client.post(self.url, content=orjson.dumps(body))
        except httpx.TimeoutException as e:
            msg = f"Proxy timeout after {self.timeout}s"
            raise LLMTimeoutError(msg) from e
        except httpx.RequestError as e:
            msg = f"Cannot connect to proxy: {e}"
            raise LLMUnavailableError(msg) from e

        if response.is_error:
            msg = f"Server error {response.status_code}: {response.text}"
            raise LLMResponseError(
                msg, status_code=response.status_code, detail=response.text
            )

        return LLMCompletionResult.from_response(parse_completion(response))
