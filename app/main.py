"""
Gemini chat relay: FastAPI application entry point.

Settings are loaded once at process start and injected into the app; a
missing GEMINI_API_KEY stops the process before it binds a port.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.config import Settings, get_settings
from app.routers import chat, health
from app.schemas.chat import ChatError
from app.services.gemini import GeminiChatService

__version__ = "1.0.0"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

INVALID_BODY_ERROR = "invalid request body"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and shutdown; the chat service is already built by create_app."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting Gemini chat relay (env=%s, model=%s)",
        settings.app_env,
        settings.gemini_model,
    )
    yield
    logger.info("Shutting down Gemini chat relay.")


def create_app(
    settings: Optional[Settings] = None,
    chat_service: Optional[GeminiChatService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    ``chat_service`` defaults to a GeminiChatService built from ``settings``;
    tests pass a stub here.
    """
    if settings is None:
        settings = get_settings()
    logging.getLogger().setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    app = FastAPI(
        title="Gemini Chat Relay",
        description="Relays chat messages and conversation history to Google Gemini.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.chat_service = chat_service or GeminiChatService.from_settings(settings)

    # ── Unhandled errors ─────────────────────────────────────────────────────
    # Must be registered before CORS so its 500s carry CORS headers.

    @app.middleware("http")
    async def unhandled_exception_middleware(request: Request, call_next):
        """Return a generic error for any unhandled exception."""
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled exception on %s %s", request.method, request.url)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ChatError(error=chat.UPSTREAM_ERROR).model_dump(),
            )

    # ── CORS ─────────────────────────────────────────────────────────────────

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ──────────────────────────────────────────────────────────────

    app.include_router(health.router)
    app.include_router(chat.router)

    # ── Exception handlers ───────────────────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Answer malformed bodies with the same ``{"error": ...}`` shape as the endpoint."""
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ChatError(error=INVALID_BODY_ERROR).model_dump(),
        )

    return app


def run() -> None:
    """Console entry point: validate configuration, then serve with uvicorn."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        logger.critical(
            "Invalid configuration, refusing to start. "
            "GEMINI_API_KEY must be set in the environment or .env. %s",
            exc,
        )
        sys.exit(1)

    app = create_app(settings)
    logger.info("Chat relay listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
