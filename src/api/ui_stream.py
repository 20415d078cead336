"""UI message stream encoding.

Wraps relay events in the UI message stream envelope: Server-Sent Events
whose ``data:`` lines carry one StreamPart each, terminated by
``data: [DONE]``. Consecutive text deltas share one text block; a tool
event closes the open block.
"""

import logging
import uuid
from collections.abc import AsyncGenerator, AsyncIterable

from src.models.schemas import (
    RelayEvent,
    StreamPart,
    StreamPartType,
    TextDelta,
    ToolCallCompleted,
    ToolCallStarted,
)

logger = logging.getLogger(__name__)

UI_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
    "x-vercel-ai-ui-message-stream": "v1",
}

DONE_LINE = "data: [DONE]\n\n"


async def encode_ui_message_stream(
    events: AsyncIterable[RelayEvent],
    message_id: str | None = None,
) -> AsyncGenerator[str]:
    """Encode relay events as UI message stream SSE lines.

    An exception raised by ``events`` ends the stream with a single
    ``error`` part carrying the message verbatim.

    Args:
        events: Relay events in arrival order.
        message_id: Identifier for the assistant message; random if None.

    Yields:
        SSE-formatted lines.
    """
    message_id = message_id or f"msg-{uuid.uuid4().hex}"
    open_text_id: str | None = None
    text_blocks = 0

    yield StreamPart(type=StreamPartType.START, message_id=message_id).to_sse()

    try:
        async for event in events:
            if isinstance(event, TextDelta):
                if open_text_id is None:
                    text_blocks += 1
                    open_text_id = f"text-{text_blocks}"
                    yield StreamPart(type=StreamPartType.TEXT_START, id=open_text_id).to_sse()
                yield StreamPart(
                    type=StreamPartType.TEXT_DELTA, id=open_text_id, delta=event.text
                ).to_sse()
                continue

            if open_text_id is not None:
                yield StreamPart(type=StreamPartType.TEXT_END, id=open_text_id).to_sse()
                open_text_id = None

            if isinstance(event, ToolCallStarted):
                yield StreamPart(
                    type=StreamPartType.TOOL_INPUT_AVAILABLE,
                    tool_call_id=event.call_id,
                    tool_name=event.name,
                    input=event.args,
                ).to_sse()
            elif isinstance(event, ToolCallCompleted):
                yield StreamPart(
                    type=StreamPartType.TOOL_OUTPUT_AVAILABLE,
                    tool_call_id=event.call_id,
                    output=event.result,
                ).to_sse()

    except Exception as e:
        logger.error(f"Stream {message_id} failed: {e}")
        yield StreamPart(type=StreamPartType.ERROR, error_text=str(e)).to_sse()
        yield DONE_LINE
        return

    if open_text_id is not None:
        yield StreamPart(type=StreamPartType.TEXT_END, id=open_text_id).to_sse()

    yield StreamPart(type=StreamPartType.FINISH).to_sse()
    yield DONE_LINE
