"""UI message normalization for the provider call.

Validates the incoming message list, enforces the text budget and flattens
structured UI messages into role/content pairs.
"""

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.agent.config import MAX_INPUT_CHARS
from src.models.schemas import ModelMessage, PartType, UIMessage

logger = logging.getLogger(__name__)

_UI_MESSAGES = TypeAdapter(list[UIMessage])


class MessageValidationError(Exception):
    """Raised when a chat request cannot be accepted."""

    pass


class InputTooLargeError(MessageValidationError):
    """Raised when the summed text length exceeds the budget."""

    pass


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(p) for p in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def parse_ui_messages(raw: Any) -> list[UIMessage]:
    """Parse a raw message list into UI messages.

    Args:
        raw: The decoded ``messages`` field of the request body.

    Returns:
        Validated UI messages in their original order.

    Raises:
        MessageValidationError: If ``raw`` is not a list, is empty, or holds
            an entry that is not a UI message.
    """
    if not isinstance(raw, list):
        raise MessageValidationError("Invalid body")

    if not raw:
        raise MessageValidationError("messages[] is required")

    try:
        return _UI_MESSAGES.validate_python(raw)
    except ValidationError as e:
        raise MessageValidationError(f"Invalid message: {_describe(e)}") from e


def count_text_chars(messages: Sequence[UIMessage]) -> int:
    """Sum the length of every text part, ignoring all other part types."""
    return sum(
        len(part.text)
        for message in messages
        for part in message.parts
        if part.type == PartType.TEXT and part.text is not None
    )


def enforce_budget(messages: Sequence[UIMessage], max_chars: int = MAX_INPUT_CHARS) -> int:
    """Check the summed text length against the budget.

    Returns:
        The counted length.

    Raises:
        InputTooLargeError: If the length exceeds ``max_chars``.
    """
    total = count_text_chars(messages)
    if total > max_chars:
        raise InputTooLargeError("Input too large")
    return total


def to_model_messages(messages: Sequence[UIMessage]) -> list[ModelMessage]:
    """Flatten UI messages into provider messages.

    Message ids and non-text parts are dropped. A message left without any
    text is dropped as a whole.
    """
    flat: list[ModelMessage] = []
    for message in messages:
        content = message.text
        if not content:
            continue
        flat.append(ModelMessage(role=message.role, content=content))
    return flat


def normalize_messages(raw: Any, max_chars: int = MAX_INPUT_CHARS) -> list[ModelMessage]:
    """Validate a raw message list and convert it for the provider.

    All-or-nothing: either every check passes and the full flat list is
    returned, or an error is raised and nothing is sent.

    Args:
        raw: The decoded ``messages`` field of the request body.
        max_chars: Ceiling on the summed text length.

    Returns:
        Flat role/content messages.

    Raises:
        MessageValidationError: On a malformed list or when no text remains.
        InputTooLargeError: When the text budget is exceeded.
    """
    messages = parse_ui_messages(raw)
    total = enforce_budget(messages, max_chars)

    flat = to_model_messages(messages)
    if not flat:
        raise MessageValidationError("messages[] has no text content")

    logger.debug(f"Normalized {len(messages)} messages ({total} chars) into {len(flat)}")
    return flat
