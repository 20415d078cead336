"""Test package for Chat Relay.

Structure:
    - unit/: Individual function and class tests
    - integration/: Endpoint and end-to-end streaming tests

The hosted provider is replaced by a recording fake relay except in tests
marked requires_api_key. Leverages pytest with pytest-check for soft
assertions.
"""
