"""Chat transcript state and UI message stream consumer."""

import json
import os
import uuid
from collections.abc import Callable
from enum import Enum
from typing import Any

import httpx

from src.agent.config import default_model
from src.models.schemas import (
    PartType,
    StreamPartType,
    ToolState,
    UIMessage,
    UIMessagePart,
)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

SYSTEM_PROMPT = "You are a helpful assistant."
SEED_MESSAGE_ID = "sys-0"


class ChatStatus(str, Enum):
    READY = "ready"
    SUBMITTED = "submitted"
    STREAMING = "streaming"
    ERROR = "error"


def seed_message() -> UIMessage:
    return UIMessage(
        id=SEED_MESSAGE_ID,
        role="system",
        parts=[UIMessagePart(type=PartType.TEXT.value, text=SYSTEM_PROMPT)],
    )


class ChatSession:
    """Manages the transcript of one chat page.

    The transcript is append-only and starts with a single system message.
    At most one reply is streamed at a time.
    """

    def __init__(self, model: str | None = None) -> None:
        self.model: str = model or default_model()
        self.messages: list[UIMessage] = [seed_message()]
        self.status: ChatStatus = ChatStatus.READY
        self.error: str | None = None

    @property
    def is_busy(self) -> bool:
        return self.status in (ChatStatus.SUBMITTED, ChatStatus.STREAMING)

    @property
    def display_messages(self) -> list[UIMessage]:
        return [m for m in self.messages if m.role != "system"]

    def submit(self, text: str) -> dict[str, Any]:
        """Append a user message and return the request payload.

        Raises:
            RuntimeError: If a reply is still streaming.
            ValueError: If the text is blank.
        """
        if self.is_busy:
            raise RuntimeError("A reply is still streaming")
        if not text.strip():
            raise ValueError("Message is empty")

        self.messages.append(
            UIMessage(
                id=f"msg-{uuid.uuid4().hex}",
                role="user",
                parts=[UIMessagePart(type=PartType.TEXT.value, text=text)],
            )
        )
        self.status = ChatStatus.SUBMITTED
        self.error = None
        return self.request_payload()

    def request_payload(self) -> dict[str, Any]:
        return {
            "messages": [m.model_dump(mode="json", by_alias=True, exclude_none=True) for m in self.messages],
            "model": self.model,
        }

    def _assistant_message(self, message_id: str | None = None) -> UIMessage:
        """Return the assistant message being streamed, creating it on first use."""
        last = self.messages[-1]
        if last.role == "assistant" and self.status == ChatStatus.STREAMING:
            return last

        message = UIMessage(
            id=message_id or f"msg-{uuid.uuid4().hex}",
            role="assistant",
            parts=[],
        )
        self.messages.append(message)
        self.status = ChatStatus.STREAMING
        return message

    def _find_tool(self, call_id: str | None) -> UIMessagePart | None:
        last = self.messages[-1]
        if last.role != "assistant":
            return None
        for part in last.tool_invocations:
            if part.tool_call_id == call_id:
                return part
        return None

    def apply_part(self, part: dict[str, Any]) -> None:
        """Apply one decoded stream part to the transcript.

        Parts arriving while not busy (after stop, completion or error) are
        ignored.
        """
        if not self.is_busy:
            return

        kind = part.get("type")

        if kind == StreamPartType.START:
            self._assistant_message(part.get("messageId"))

        elif kind == StreamPartType.TEXT_DELTA:
            message = self._assistant_message()
            delta = part.get("delta") or ""
            if message.parts and message.parts[-1].type == PartType.TEXT:
                message.parts[-1].text = (message.parts[-1].text or "") + delta
            else:
                message.parts.append(UIMessagePart(type=PartType.TEXT.value, text=delta))

        elif kind == StreamPartType.TOOL_INPUT_AVAILABLE:
            message = self._assistant_message()
            message.parts.append(
                UIMessagePart(
                    type=PartType.TOOL.value,
                    tool_call_id=part.get("toolCallId"),
                    tool_name=part.get("toolName"),
                    state=ToolState.PENDING.value,
                    args=part.get("input") or {},
                )
            )

        elif kind == StreamPartType.TOOL_OUTPUT_AVAILABLE:
            tool = self._find_tool(part.get("toolCallId"))
            if tool is not None:
                tool.state = ToolState.RESULT.value
                tool.result = part.get("output")

        elif kind == StreamPartType.ERROR:
            self.fail(part.get("errorText") or "Unknown error")

        elif kind == StreamPartType.FINISH:
            self.complete()

    def complete(self) -> None:
        if self.is_busy:
            self.status = ChatStatus.READY

    def fail(self, error: str) -> None:
        self.error = error
        self.status = ChatStatus.ERROR

    def stop(self) -> None:
        """Abandon the reply being streamed, keeping what already arrived."""
        if self.is_busy:
            self.status = ChatStatus.READY

    def clear(self) -> None:
        """Reset the transcript to the seeded system message."""
        self.messages = [seed_message()]
        self.status = ChatStatus.READY
        self.error = None


def _error_text(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or f"HTTP {response.status_code}"
    except (ValueError, AttributeError):
        return f"HTTP {response.status_code}"


async def stream_chat_response(
    session: ChatSession,
    payload: dict[str, Any],
    on_update: Callable[[], None],
    client: httpx.AsyncClient | None = None,
) -> None:
    """Post a conversation to /api/chat and feed the stream into ``session``.

    Stops reading as soon as the session is no longer busy.
    """
    owns_client = client is None
    client = client or httpx.AsyncClient(base_url=API_BASE_URL, timeout=120.0)
    try:
        async with client.stream(
            "POST",
            "/api/chat",
            json=payload,
            headers={"Accept": "text/event-stream"},
        ) as response:
            if response.is_error:
                await response.aread()
                session.fail(_error_text(response))
                return

            async for line in response.aiter_lines():
                if not line.startswith("data: "):
                    continue
                data = line.removeprefix("data: ").strip()
                if data == "[DONE]":
                    break
                try:
                    part = json.loads(data)
                except ValueError as e:
                    session.fail(f"Invalid stream data: {e}")
                    return
                session.apply_part(part)
                on_update()
                if not session.is_busy:
                    break

        # Stream ended without a finish part
        session.complete()
    except httpx.RequestError as e:
        session.fail(f"Connection failed: {e}")
    finally:
        if owns_client:
            await client.aclose()
        on_update()
