from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class PartType(str, Enum):
    """Known UI message part types. Other types are carried but ignored."""

    TEXT = "text"
    TOOL = "tool"


class ToolState(str, Enum):
    """Lifecycle of a tool invocation as shown in the transcript."""

    PENDING = "pending"
    RESULT = "result"


class UIMessagePart(BaseModel):
    """One typed part of a UI message.

    Text parts carry ``text``. Tool parts carry the tool invocation record
    (call id, tool name, state, arguments and result).
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str
    text: str | None = None
    tool_call_id: str | None = Field(None, alias="toolCallId")
    tool_name: str | None = Field(None, alias="toolName")
    state: str | None = None
    args: dict[str, Any] | None = None
    result: Any = None


class UIMessage(BaseModel):
    """A structured message as displayed to the user.

    Attributes:
        id: Client-side identifier, dropped before the provider call.
        role: The speaker (system, user, or assistant).
        parts: Ordered typed parts.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    role: Role
    parts: list[UIMessagePart]

    @property
    def text(self) -> str:
        return "".join(
            p.text for p in self.parts if p.type == PartType.TEXT and p.text is not None
        )

    @property
    def tool_invocations(self) -> list[UIMessagePart]:
        return [p for p in self.parts if p.type == PartType.TOOL]


class ModelMessage(BaseModel):
    """Flat message in the shape the provider call expects."""

    role: Role
    content: str


class ErrorResponse(BaseModel):
    """Body of a 400 response."""

    error: str


class ModelOption(BaseModel):
    value: str
    label: str


class ModelList(BaseModel):
    """Selectable model identifiers and the configured default."""

    models: list[ModelOption]
    default: str


class WeatherReading(BaseModel):
    """Synthetic weather reading returned by the getWeather tool."""

    model_config = ConfigDict(populate_by_name=True)

    city: str
    temp_c: int = Field(..., alias="tempC")
    condition: str
    humidity: int = Field(..., ge=0, le=100)
    wind_kph: int = Field(..., alias="windKph", ge=0)


class TextDelta(BaseModel):
    """A piece of assistant text from the provider stream."""

    kind: Literal["text"] = "text"
    text: str


class ToolCallStarted(BaseModel):
    """The model asked for a tool to be called."""

    kind: Literal["tool-call"] = "tool-call"
    call_id: str
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class ToolCallCompleted(BaseModel):
    """A tool call finished and its result was handed back to the model."""

    kind: Literal["tool-result"] = "tool-result"
    call_id: str
    name: str
    result: Any = None


RelayEvent = TextDelta | ToolCallStarted | ToolCallCompleted


class StreamPartType(str, Enum):
    """Part types of the UI message stream."""

    START = "start"
    TEXT_START = "text-start"
    TEXT_DELTA = "text-delta"
    TEXT_END = "text-end"
    TOOL_INPUT_AVAILABLE = "tool-input-available"
    TOOL_OUTPUT_AVAILABLE = "tool-output-available"
    ERROR = "error"
    FINISH = "finish"


class StreamPart(BaseModel):
    """One event of the UI message stream, sent as an SSE ``data:`` line.

    Attributes:
        type: Part type.
        id: Text block identifier for text-start/delta/end.
        message_id: Assistant message identifier on ``start``.
        delta: Text increment for ``text-delta``.
        tool_call_id: Tool call identifier for tool parts.
        tool_name: Tool name for ``tool-input-available``.
        input: Tool arguments for ``tool-input-available``.
        output: Tool result for ``tool-output-available``.
        error_text: Error message for ``error``.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: StreamPartType
    id: str | None = None
    message_id: str | None = Field(None, alias="messageId")
    delta: str | None = None
    tool_call_id: str | None = Field(None, alias="toolCallId")
    tool_name: str | None = Field(None, alias="toolName")
    input: dict[str, Any] | None = None
    output: Any = None
    error_text: str | None = Field(None, alias="errorText")

    def to_sse(self) -> str:
        return f"data: {self.model_dump_json(by_alias=True, exclude_none=True)}\n\n"
