"""HTTP client for an OpenAI-compatible chat-completions API.

Used two ways: by the generation service as its collaborator, and by the
``/generate`` proxy endpoint, which forwards browser requests upstream with
the server-side key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import orjson
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from pantry_chef.llm.exceptions import (
    LLMConfigurationError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from pantry_chef.llm.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    LLMCompletionResult,
    Tool,
    ToolFunction,
)
from pantry_chef.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_chef.llm.models import ChatMessage


logger = get_logger(__name__)

RECIPE_TOOL_NAME = "make_recipe"

# Parameters stay loose; the normalizer is responsible for shape.
RECIPE_TOOL = Tool(
    function=ToolFunction(
        name=RECIPE_TOOL_NAME,
        description="Return ONE recipe as a single JSON object matching the app schema.",
        parameters={"type": "object", "additionalProperties": True},
    )
)


class OpenAIChatClient:
    """Async HTTP client for OpenAI-compatible chat completions.

    In tool mode every request forces a ``make_recipe`` tool call, so the
    recipe arrives as the call's JSON arguments instead of free text.

    Attributes:
        base_url: API base URL.
        model: Default model.
        temperature: Default sampling temperature.
        max_tokens: Default output length (None = provider default).
        timeout: HTTP request timeout in seconds.
        max_retries: Retries for timeouts and connection errors.
        tool_mode: Whether to force the recipe tool call.
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = DEFAULT_BASE_URL,
        *,
        temperature: float = 0.3,
        max_tokens: int | None = None,
        timeout: float = 60.0,
        max_retries: int = 2,
        requests_per_minute: float = 60.0,
        tool_mode: bool = True,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Bearer key for the upstream API.
            model: Default model name.
            base_url: API base URL.
            temperature: Default sampling temperature.
            max_tokens: Default maximum output tokens.
            timeout: HTTP request timeout in seconds.
            max_retries: Maximum retries for transient failures.
            requests_per_minute: Client-side rate limit.
            tool_mode: Force a ``make_recipe`` tool call on every request.

        Raises:
            LLMConfigurationError: If ``api_key`` is empty.
        """
        if not api_key:
            msg = "Missing OPENAI_API_KEY"
            raise LLMConfigurationError(msg)

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries
        self.tool_mode = tool_mode
        self._http_client: httpx.AsyncClient | None = None
        # One request per (60/rpm) seconds, no initial burst
        self._rate_limiter = AsyncLimiter(1, 60.0 / requests_per_minute)

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    async def initialize(self) -> None:
        """Initialize the HTTP client with auth headers."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            limits=httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
            ),
        )
        logger.info(
            "OpenAIChatClient initialized",
            model=self.model,
            timeout=self.timeout,
            tool_mode=self.tool_mode,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("OpenAIChatClient shutdown")

    def build_request(
        self,
        messages: Sequence[ChatMessage | dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> ChatCompletionRequest:
        """Build the upstream request, applying defaults and tool mode."""
        return ChatCompletionRequest(
            model=model or self.model,
            messages=[
                m if isinstance(m, dict) else m.model_dump() for m in messages
            ],
            temperature=self.temperature if temperature is None else temperature,
            max_tokens=self.max_tokens if max_tokens is None else max_tokens,
            tools=[RECIPE_TOOL] if self.tool_mode else None,
            tool_choice="required" if self.tool_mode else None,
        )

    async def send(self, request: ChatCompletionRequest) -> httpx.Response:
        """POST a request upstream, retrying timeouts and connection errors.

        The response is returned whatever its status code.

        Raises:
            LLMTimeoutError: Every attempt timed out.
            LLMUnavailableError: Every attempt failed to connect.
        """
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            try:
                return await self._http_client.post(
                    self.chat_url,
                    content=orjson.dumps(request.model_dump(exclude_none=True)),
                )

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "Chat completion request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Upstream timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "Chat completion connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to upstream: {e}"
                raise LLMUnavailableError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMCompletionResult:
        """Run a chat completion and return its raw text.

        Raises:
            LLMUnavailableError: If the upstream cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMRateLimitError: On HTTP 429.
            LLMResponseError: On any other non-2xx status or a malformed body.
        """
        request = self.build_request(
            messages, model=model, temperature=temperature, max_tokens=max_tokens
        )
        response = await self.send(request)

        if response.status_code == 429:
            retry_after = response.headers.get("retry-after", "60")
            msg = f"Upstream rate limit exceeded, retry after {retry_after}s"
            raise LLMRateLimitError(msg, status_code=429, detail=response.text)

        if response.is_error:
            logger.error(
                "Chat completion failed",
                status_code=response.status_code,
                url=self.chat_url,
                detail=response.text[:500],
            )
            msg = f"Upstream returned {response.status_code}: {response.text}"
            raise LLMResponseError(
                msg, status_code=response.status_code, detail=response.text
            )

        return LLMCompletionResult.from_response(parse_completion(response))


def parse_completion(response: httpx.Response) -> ChatCompletionResponse:
    """Decode a 2xx body as a chat completion.

    Raises:
        LLMResponseError: If the body is not JSON or not completion-shaped.
    """
    try:
        return ChatCompletionResponse.model_validate(orjson.loads(response.content))
    except orjson.JSONDecodeError as e:
        msg = "Upstream returned a non-JSON body"
        raise LLMResponseError(
            msg, status_code=response.status_code, detail=response.text[:500]
        ) from e
    except ValidationError as e:
        msg = f"Upstream returned an unexpected completion shape: {e.error_count()} errors"
        raise LLMResponseError(
            msg, status_code=response.status_code, detail=response.text[:500]
        ) from e
