"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Transcript display with streaming updates and tool invocation cards
    - Model selection from a fixed list
    - Send, stop and clear actions against the chat endpoint

Contains minimal business logic. Delegates all model calls to the API.
"""
