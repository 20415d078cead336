"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handlers and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.agent.config import get_agent_config
from src.api.chat import router as chat_router
from src.api.routes import router as models_router
from src.models.schemas import ErrorResponse
from src.parsing.message_normalizer import MessageValidationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Refuses to start when provider credentials are missing.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    config = get_agent_config()
    logger.info(f"Starting Chat Relay API (provider {config.base_url}, model {config.model_name})")
    yield
    # Shutdown
    logger.info("Shutting down Chat Relay API...")


async def message_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map rejected chat requests to 400 with an ``error`` field."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Chat Relay API",
        description=(
            "Minimal chat backend for hosted OpenAI-compatible models. "
            "Validates UI-shaped conversations, converts them to provider messages "
            "and streams the reply, including tool calls, as a UI message stream."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(MessageValidationError, message_validation_handler)

    application.include_router(chat_router)
    application.include_router(models_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "chat-relay"}

    return application


app = create_app()
