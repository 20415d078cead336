"""Request parsing for the chat endpoint.

Turns UI-shaped conversations into the flat messages a provider call takes.

Responsibilities:
    - Shape validation of the incoming message list
    - Text length accounting over text parts only
    - Enforcement of the aggregate character budget
    - Conversion to role/content pairs, dropping transport-only fields
"""

from src.parsing.message_normalizer import (
    InputTooLargeError,
    MessageValidationError,
    count_text_chars,
    normalize_messages,
    parse_ui_messages,
    to_model_messages,
)

__all__ = [
    "InputTooLargeError",
    "MessageValidationError",
    "count_text_chars",
    "normalize_messages",
    "parse_ui_messages",
    "to_model_messages",
]
