"""Streaming relay between the chat endpoint and the hosted model.

Builds an agno Agent for the requested model, runs it over the normalized
conversation with the declared tools, and re-exposes the run's event stream
as relay events (text deltas and tool call start/completion).

The agent is stateless: no storage, no knowledge base, no history. The
whole conversation arrives with every request.
"""

import json
import logging
from collections.abc import AsyncGenerator, Sequence
from typing import Any

from agno.agent import Agent
from agno.models.message import Message
from agno.run.agent import RunEvent

from src.agent.config import AgentConfig, get_agent_config
from src.agent.provider import ProviderClient
from src.agent.tools import RELAY_TOOLS
from src.models.schemas import (
    ModelMessage,
    RelayEvent,
    TextDelta,
    ToolCallCompleted,
    ToolCallStarted,
)

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when the hosted provider fails during a streaming run."""

    pass


def _decode_result(result: Any) -> Any:
    """Tool results travel as JSON strings; hand them on as objects."""
    if isinstance(result, str):
        try:
            return json.loads(result)
        except ValueError:
            return result
    return result


def to_relay_event(event: Any) -> RelayEvent | None:
    """Map one agno run event to a relay event.

    Returns None for events the client has no use for (run started,
    reasoning steps, memory updates and so on).

    Raises:
        ProviderError: On a run error event.
    """
    kind = getattr(event, "event", None)

    if kind == RunEvent.run_content.value:
        content = getattr(event, "content", None)
        if isinstance(content, str) and content:
            return TextDelta(text=content)
        return None

    if kind == RunEvent.tool_call_started.value:
        tool = event.tool
        return ToolCallStarted(
            call_id=tool.tool_call_id or "",
            name=tool.tool_name or "",
            args=tool.tool_args or {},
        )

    if kind == RunEvent.tool_call_completed.value:
        tool = event.tool
        return ToolCallCompleted(
            call_id=tool.tool_call_id or "",
            name=tool.tool_name or "",
            result=_decode_result(tool.result),
        )

    if kind == RunEvent.run_error.value:
        raise ProviderError(str(getattr(event, "content", None) or "Provider error"))

    return None


class RelayService:
    """Opens one streaming model run per chat request.

    Wraps agno's Agent with:
    - Per-request model selection through the provider client
    - The declared tool set
    - A narrow event stream for the transport layer
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        provider: ProviderClient | None = None,
    ) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
            provider: Optional provider client. Built from config if not provided.
        """
        self._config = config or get_agent_config()
        self._provider = provider or ProviderClient(self._config)

    @property
    def config(self) -> AgentConfig:
        return self._config

    def _create_agent(self, model_id: str) -> Agent:
        """Create an agent bound to ``model_id`` with the declared tools.

        The agent gets no description or instructions so the system message
        of the conversation reaches the model unchanged.
        """
        return Agent(
            model=self._provider.model(model_id),
            tools=list(RELAY_TOOLS),
        )

    async def stream(
        self,
        messages: Sequence[ModelMessage],
        model_id: str | None = None,
    ) -> AsyncGenerator[RelayEvent]:
        """Stream relay events for a conversation.

        Single pass: the returned generator cannot be restarted. Closing it
        early stops reading from the provider.

        Args:
            messages: Normalized conversation.
            model_id: Model identifier; the configured default when None.

        Yields:
            TextDelta, ToolCallStarted and ToolCallCompleted events.

        Raises:
            ProviderError: If the provider fails mid-run.
        """
        model_id = model_id or self._config.model_name
        agent = self._create_agent(model_id)
        logger.info(f"Relaying {len(messages)} messages to {model_id}")

        run_input = [Message(role=m.role, content=m.content) for m in messages]

        try:
            response_stream = agent.arun(
                input=run_input,
                stream=True,
                stream_events=True,
            )

            async for event in response_stream:
                relay_event = to_relay_event(event)
                if relay_event is not None:
                    yield relay_event

        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(str(e) or type(e).__name__) from e

        logger.info(f"Relay to {model_id} finished")


# Module-level singleton instance
_relay_service: RelayService | None = None


def get_relay_service() -> RelayService:
    """Get or create the global relay service.

    Returns:
        The RelayService instance.
    """
    global _relay_service
    if _relay_service is None:
        _relay_service = RelayService()
    return _relay_service
