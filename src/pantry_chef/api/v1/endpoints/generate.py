"""Chat-completions proxy endpoint.

Browser clients post ``{"messages": [...]}`` here instead of calling the
upstream directly, so the upstream key never leaves the server. Model,
temperature and the recipe tool are always taken from server config; the
upstream body is returned unchanged.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status

from pantry_chef.api.dependencies import GatedRequest, get_upstream_client
from pantry_chef.core.exceptions import (
    BadRequestException,
    ServiceUnavailableException,
    UpstreamException,
)
from pantry_chef.llm.client.openai import OpenAIChatClient
from pantry_chef.llm.exceptions import LLMUnavailableError
from pantry_chef.observability.logging import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["generate"])


def _messages_from(body: Any) -> list[dict[str, Any]]:
    messages = body.get("messages") if isinstance(body, dict) else None
    if (
        not isinstance(messages, list)
        or not messages
        or not all(isinstance(message, dict) for message in messages)
    ):
        msg = "Missing messages"
        raise BadRequestException(msg)
    return messages


@router.post(
    "/generate",
    summary="Proxy a chat completion",
    description=(
        "Forward chat messages to the upstream chat-completions API with the "
        "server's key, model and recipe tool, and return the upstream body."
    ),
    dependencies=GatedRequest,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Body is not JSON or has no messages"},
        status.HTTP_401_UNAUTHORIZED: {"description": "Missing or wrong app token"},
        status.HTTP_403_FORBIDDEN: {"description": "Origin not allowed"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Upstream unavailable"},
    },
)
async def proxy_generate(
    request: Request,
    upstream: Annotated[OpenAIChatClient, Depends(get_upstream_client)],
) -> Response:
    """Forward one chat-completions call upstream."""
    try:
        body = await request.json()
    except ValueError:
        msg = "Invalid JSON body"
        raise BadRequestException(msg) from None

    messages = _messages_from(body)

    try:
        upstream_response = await upstream.send(upstream.build_request(messages))
    except LLMUnavailableError as e:
        logger.warning("Upstream unavailable", error=str(e))
        raise ServiceUnavailableException(str(e)) from e

    if upstream_response.is_error:
        logger.warning(
            "Upstream returned error",
            status_code=upstream_response.status_code,
        )
        raise UpstreamException(upstream_response.status_code, upstream_response.text)

    return Response(
        content=upstream_response.content,
        status_code=status.HTTP_200_OK,
        media_type="application/json",
    )
