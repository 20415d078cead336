"""Chat endpoint streaming model output to the UI.

Validation happens before the provider is touched; a rejected request gets
a 400 with ``{"error": ...}`` and never opens a model run.
"""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from src.agent.chat_agent import RelayService, get_relay_service
from src.api.ui_stream import UI_STREAM_HEADERS, encode_ui_message_stream
from src.models.schemas import ErrorResponse
from src.parsing.message_normalizer import MessageValidationError, normalize_messages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


async def _read_body(request: Request) -> dict[str, Any]:
    """Decode the JSON body, rejecting anything but an object."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MessageValidationError("Invalid body") from e

    if not isinstance(body, dict):
        raise MessageValidationError("Invalid body")
    return body


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid body or input too large"}},
)
async def chat(
    request: Request,
    relay: Annotated[RelayService, Depends(get_relay_service)],
) -> StreamingResponse:
    """Stream an assistant reply for a conversation.

    Body: ``{"messages": UIMessage[], "model"?: string}``.

    Returns:
        A ``text/event-stream`` response in the UI message stream envelope.

    Raises:
        MessageValidationError: Malformed body, empty or invalid messages,
            or input over the character budget (mapped to 400).
    """
    body = await _read_body(request)

    model = body.get("model")
    if model is not None and not isinstance(model, str):
        raise MessageValidationError("model must be a string")

    messages = normalize_messages(body.get("messages"), relay.config.max_input_chars)

    return StreamingResponse(
        encode_ui_message_stream(relay.stream(messages, model or None)),
        media_type="text/event-stream",
        headers=UI_STREAM_HEADERS,
    )
