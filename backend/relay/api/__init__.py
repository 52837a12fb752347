"""
FastAPI application and API initialization.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from relay.api.middleware import setup_body_limit, setup_cors, setup_exception_handlers
from relay.api.routes import api_router
from relay.config import Settings, get_settings

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "application_startup_complete",
        environment=settings.environment,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
    )

    # Application runs here
    yield

    logger.info("application_shutdown_complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Setup middleware
    setup_cors(app, settings)
    setup_body_limit(app, settings)
    setup_exception_handlers(app, settings)

    # Include API routes
    app.include_router(api_router)

    return app
