"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - provider_env: Provider credentials set in the environment
    - agent_config: AgentConfig with test credentials
    - fake_relay: Recording stand-in for the hosted provider relay
    - async_client: HTTPX client for API testing, wired to fake_relay
"""

import json
from collections.abc import AsyncGenerator, Sequence
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.agent.chat_agent import get_relay_service
from src.agent.config import AgentConfig
from src.api import app
from src.models.schemas import ModelMessage, RelayEvent, TextDelta


class FakeRelay:
    """Relay that records every provider invocation and replays scripted events."""

    def __init__(self, config: AgentConfig) -> None:
        self.config = config
        self.calls: list[tuple[list[ModelMessage], str | None]] = []
        self.events: list[RelayEvent] = [TextDelta(text="Hello"), TextDelta(text=" there")]
        self.error: Exception | None = None

    async def stream(
        self, messages: Sequence[ModelMessage], model_id: str | None = None
    ) -> AsyncGenerator[RelayEvent]:
        self.calls.append((list(messages), model_id))
        for event in self.events:
            yield event
        if self.error is not None:
            raise self.error


def parse_sse(body: str) -> list[dict[str, Any] | str]:
    """Decode the ``data:`` lines of an SSE body; ``[DONE]`` is kept as a string."""
    parts: list[dict[str, Any] | str] = []
    for line in body.splitlines():
        if not line.startswith("data: "):
            continue
        data = line.removeprefix("data: ").strip()
        parts.append(data if data == "[DONE]" else json.loads(data))
    return parts


@pytest.fixture
def provider_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set provider credentials and clear optional overrides."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://provider.test/v1")
    monkeypatch.delenv("CHAT_MODEL", raising=False)
    monkeypatch.delenv("MAX_INPUT_CHARS", raising=False)


@pytest.fixture
def agent_config() -> AgentConfig:
    """AgentConfig with test credentials and default limits."""
    return AgentConfig(
        api_key="sk-test-key",
        base_url="http://provider.test/v1",
        model_name="gpt-4o-mini",
    )


@pytest.fixture
def fake_relay(agent_config: AgentConfig) -> FakeRelay:
    return FakeRelay(agent_config)


@pytest.fixture
async def async_client(fake_relay: FakeRelay) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient whose chat requests go to ``fake_relay``.
    """
    app.dependency_overrides[get_relay_service] = lambda: fake_relay
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_relay_service, None)
