"""FastAPI endpoints for the chat relay.

HTTP and streaming routes with async request handling.
Streams replies as Server-Sent Events in the UI message stream envelope.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Streamed chat completion
    - GET /api/models: Selectable model identifiers
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
