"""Provider client binding credentials to model handles."""

from agno.models.openai import OpenAIChat

from src.agent.config import AgentConfig

# Chat-completions roles as OpenAI-compatible gateways accept them.
# OpenAIChat would otherwise send system messages as "developer".
CHAT_ROLE_MAP = {
    "system": "system",
    "user": "user",
    "assistant": "assistant",
    "tool": "tool",
}


class ProviderClient:
    """Binds an API key and base URL into per-model invocation handles."""

    def __init__(self, config: AgentConfig) -> None:
        self._config = config

    def model(self, model_id: str) -> OpenAIChat:
        """Return an OpenAI-compatible model handle for ``model_id``."""
        return OpenAIChat(
            id=model_id,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
            role_map=dict(CHAT_ROLE_MAP),
        )
