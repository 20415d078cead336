"""Integration tests for components working together as a system.

Coverage:
    - Chat endpoint with real HTTP requests over ASGITransport
    - Request validation before any provider call
    - UI message stream framing, tool events and terminal errors
    - UI session consuming the live endpoint

The hosted provider is replaced by a recording fake relay. Tests marked
requires_api_key talk to the configured provider and are skipped without
credentials.
"""
