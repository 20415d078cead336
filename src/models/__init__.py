"""Pydantic models for API requests, responses and stream events.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - UIMessage / UIMessagePart: Structured messages as the UI holds them
    - ModelMessage: Flat role/content message for the provider call
    - ErrorResponse / ModelList: Endpoint payloads
    - WeatherReading: Result of the getWeather tool
    - TextDelta / ToolCallStarted / ToolCallCompleted: Relay events
    - StreamPart: One event of the UI message stream
"""

from src.models.schemas import (
    ErrorResponse,
    ModelList,
    ModelMessage,
    ModelOption,
    PartType,
    RelayEvent,
    StreamPart,
    StreamPartType,
    TextDelta,
    ToolCallCompleted,
    ToolCallStarted,
    ToolState,
    UIMessage,
    UIMessagePart,
    WeatherReading,
)

__all__ = [
    "ErrorResponse",
    "ModelList",
    "ModelMessage",
    "ModelOption",
    "PartType",
    "RelayEvent",
    "StreamPart",
    "StreamPartType",
    "TextDelta",
    "ToolCallCompleted",
    "ToolCallStarted",
    "ToolState",
    "UIMessage",
    "UIMessagePart",
    "WeatherReading",
]
