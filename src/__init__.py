"""Chat Relay - streaming chat front-end for hosted language models.

Combines FastAPI for HTTP streaming, Agno for model runs and tool calls,
NiceGUI for visualization, and Pydantic for data validation.

Components:
    - api: Chat endpoint and UI message stream encoding
    - agent: Provider client, tools and the streaming relay
    - parsing: UI message validation and normalization
    - ui: Web interface for chat interactions
    - models: Request, message and stream event schemas
"""

__version__ = "0.1.0"
