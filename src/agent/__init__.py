"""Agno-backed relay to the hosted model provider.

Responsibilities:
    - Configuration of provider credentials and defaults
    - Per-model invocation handles for OpenAI-compatible APIs
    - The declared tool set (a mocked weather lookup)
    - Streaming runs re-exposed as relay events

Maintains clean separation from the HTTP layer.
"""

from src.agent.chat_agent import ProviderError, RelayService, get_relay_service
from src.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "ProviderError",
    "RelayService",
    "get_agent_config",
    "get_relay_service",
]
