"""Provider configuration with environment variable loading.

Pydantic-based configuration for the chat relay. Targets OpenAI and any
OpenAI-compatible API through an explicit base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gpt-4o-mini"

# Ceiling on the summed text length of one chat request
MAX_INPUT_CHARS = 200_000

AVAILABLE_MODELS: list[tuple[str, str]] = [
    ("gpt-4o-mini", "GPT-4o Mini"),
    ("gpt-4o", "GPT-4o"),
    ("gpt-5-mini", "GPT-5 Mini"),
    ("deepseek-r1", "DeepSeek R1"),
    ("deepseek-v3", "DeepSeek V3"),
]


def default_model() -> str:
    """Model identifier used when a request does not name one."""
    return os.getenv("CHAT_MODEL") or DEFAULT_MODEL


class AgentConfig(BaseModel):
    """Configuration for the streaming relay.

    Both the API key and the base URL are required; the process refuses to
    start without them.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL of the hosted provider.
        model_name: Default model identifier.
        max_input_chars: Maximum summed text length of a request.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response (None = provider default).
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY", os.getenv("LLM_API_KEY", "")),
        description="API key for LLM provider",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL", os.getenv("LLM_BASE_URL", "")),
        description="API base URL of the LLM provider",
    )
    model_name: str = Field(
        default_factory=default_model,
        description="Default model",
    )
    max_input_chars: int = Field(
        default_factory=lambda: int(os.getenv("MAX_INPUT_CHARS", str(MAX_INPUT_CHARS))),
        ge=1,
        description="Maximum summed text length of a chat request",
    )
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int | None = Field(
        default=None,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("OPENAI_API_KEY is required. Set it in the environment or .env")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that base URL is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("OPENAI_BASE_URL is required. Set it in the environment or .env")
        return v.strip()


def get_agent_config() -> AgentConfig:
    """Create relay configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValidationError: If the API key or base URL is not set.
    """
    return AgentConfig()
