"""FastAPI application for the Email Productivity Agent.

The app fails fast when the database is not configured; a missing Gemini key
only disables the AI endpoints.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from email_productivity_agent import __version__
from email_productivity_agent.api.chat import router as chat_router
from email_productivity_agent.api.deps import Services
from email_productivity_agent.api.drafts import router as drafts_router
from email_productivity_agent.api.emails import router as emails_router
from email_productivity_agent.api.prompts import router as prompts_router
from email_productivity_agent.api.system import router as system_router
from email_productivity_agent.config import Settings
from email_productivity_agent.db import build_engine, ensure_schema
from email_productivity_agent.diagnostics import check_api_connections
from email_productivity_agent.exceptions import (
    ConfigurationError,
    DatabaseError,
    LLMAPIError,
    LLMError,
    PromptNotFoundError,
    RecordNotFoundError,
)
from email_productivity_agent.llm.client import GeminiClient

logger = structlog.get_logger()


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PromptNotFoundError)
    async def _prompt_not_found(_: Request, exc: PromptNotFoundError) -> JSONResponse:
        return _error(404, exc)

    @app.exception_handler(RecordNotFoundError)
    async def _not_found(_: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(404, exc)

    @app.exception_handler(ValueError)
    async def _bad_request(_: Request, exc: ValueError) -> JSONResponse:
        return _error(400, exc)

    @app.exception_handler(ConfigurationError)
    async def _not_configured(_: Request, exc: ConfigurationError) -> JSONResponse:
        return _error(503, exc)

    @app.exception_handler(DatabaseError)
    async def _database_error(_: Request, exc: DatabaseError) -> JSONResponse:
        return _error(503, exc)

    @app.exception_handler(LLMError)
    async def _llm_error(_: Request, exc: LLMError) -> JSONResponse:
        if isinstance(exc, LLMAPIError):
            logger.error("gemini_api_error", status_code=exc.status_code, error=str(exc))
        return _error(502, exc)


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
    client: GeminiClient | None = None,
) -> FastAPI:
    """Build the application and wire its services.

    Args:
        settings: Application settings. If None, uses default settings.
        engine: Database engine. If None, one is built from the settings.
        client: Gemini client. If None, one is built from the settings.

    Raises:
        ConfigurationError: If no engine is given and the database is not configured.
    """
    from email_productivity_agent.config import get_settings

    settings = settings or get_settings()
    engine = engine if engine is not None else build_engine(settings)
    client = client or GeminiClient(settings)

    ensure_schema(engine)
    services = Services.build(settings, engine, client)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        status = await check_api_connections(settings, engine, client)
        if not status.database.connected:
            logger.error("database_unavailable", message=status.database.message)
        if not status.gemini.connected:
            logger.warning(
                "ai_features_unavailable",
                message=status.gemini.message,
                hint="You can still view emails, but AI features will not work.",
            )
        yield

    app = FastAPI(title="Email Productivity Agent", version=__version__, lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _install_error_handlers(app)

    app.include_router(system_router)
    app.include_router(emails_router)
    app.include_router(prompts_router)
    app.include_router(drafts_router)
    app.include_router(chat_router)

    logger.info("app_created", ai_enabled=settings.ai_enabled)
    return app
