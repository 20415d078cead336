"""Unit tests for UI message stream encoding."""

import pytest_check as check

from src.agent.chat_agent import ProviderError
from src.api.ui_stream import DONE_LINE, encode_ui_message_stream
from src.models.schemas import StreamPart, StreamPartType, TextDelta, ToolCallCompleted, ToolCallStarted
from tests.conftest import parse_sse


async def collect(events, message_id: str = "msg-1") -> list:
    lines = [line async for line in encode_ui_message_stream(events, message_id)]
    return parse_sse("".join(lines))


async def replay(*events, error: Exception | None = None):
    for event in events:
        yield event
    if error is not None:
        raise error


class TestEncodeText:
    async def test_text_block_framing(self) -> None:
        parts = await collect(replay(TextDelta(text="Hel"), TextDelta(text="lo")))

        check.equal(
            [p if isinstance(p, str) else p["type"] for p in parts],
            ["start", "text-start", "text-delta", "text-delta", "text-end", "finish", "[DONE]"],
        )
        check.equal(parts[0]["messageId"], "msg-1")
        check.equal([p["delta"] for p in parts if p != "[DONE]" and p["type"] == "text-delta"], ["Hel", "lo"])
        check.equal({p["id"] for p in parts[1:5]}, {"text-1"})

    async def test_empty_stream_still_finishes(self) -> None:
        parts = await collect(replay())

        check.equal(parts, [{"type": "start", "messageId": "msg-1"}, {"type": "finish"}, "[DONE]"])

    async def test_random_message_id(self) -> None:
        lines = [line async for line in encode_ui_message_stream(replay())]

        check.is_true(lines[0].startswith('data: {"type":"start","messageId":"msg-'))


class TestEncodeTools:
    async def test_tool_events_close_text_block(self) -> None:
        parts = await collect(
            replay(
                TextDelta(text="Let me check."),
                ToolCallStarted(call_id="c1", name="getWeather", args={"city": "Paris"}),
                ToolCallCompleted(call_id="c1", name="getWeather", result={"tempC": 31}),
                TextDelta(text="It is 31C."),
            )
        )
        types = [p if isinstance(p, str) else p["type"] for p in parts]

        check.equal(
            types,
            [
                "start",
                "text-start",
                "text-delta",
                "text-end",
                "tool-input-available",
                "tool-output-available",
                "text-start",
                "text-delta",
                "text-end",
                "finish",
                "[DONE]",
            ],
        )
        check.equal(
            parts[4],
            {
                "type": "tool-input-available",
                "toolCallId": "c1",
                "toolName": "getWeather",
                "input": {"city": "Paris"},
            },
        )
        check.equal(parts[5], {"type": "tool-output-available", "toolCallId": "c1", "output": {"tempC": 31}})
        check.equal(parts[6]["id"], "text-2")


class TestEncodeErrors:
    async def test_error_is_single_terminal_part(self) -> None:
        parts = await collect(
            replay(TextDelta(text="partial"), error=ProviderError("rate limit exceeded"))
        )

        check.equal(parts[-2], {"type": "error", "errorText": "rate limit exceeded"})
        check.equal(parts[-1], "[DONE]")
        check.equal(sum(1 for p in parts if p != "[DONE]" and p["type"] == "error"), 1)
        check.is_false(any(p != "[DONE]" and p["type"] == "finish" for p in parts))

    async def test_error_before_any_content(self) -> None:
        parts = await collect(replay(error=ProviderError("bad model")))

        check.equal(parts[1], {"type": "error", "errorText": "bad model"})


class TestStreamPart:
    def test_to_sse_uses_camel_case_and_skips_none(self) -> None:
        line = StreamPart(type=StreamPartType.ERROR, error_text="boom").to_sse()

        check.equal(line, 'data: {"type":"error","errorText":"boom"}\n\n')

    def test_done_line(self) -> None:
        check.equal(DONE_LINE, "data: [DONE]\n\n")
