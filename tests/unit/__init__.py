"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Message validation, length accounting and flattening
    - agent/: Configuration, provider binding, tools and event mapping
    - api/: UI message stream encoding
    - ui/: Transcript state and stream consumer

Uses mocks for agno classes and canned HTTP responses. Leverages
pytest-check for multiple assertions per test.
"""
