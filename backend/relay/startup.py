"""
Application startup and initialization.
"""
from __future__ import annotations

import structlog

from relay.config import Settings, get_settings
from relay.logging import configure_structlog, setup_logging


def initialize_app() -> Settings:
    """Initialize the application: structlog, logging config, startup report."""
    # Initialize structlog before anything logs
    configure_structlog()

    settings = get_settings()

    try:
        setup_logging(settings)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        structlog.get_logger(__name__).warning("logging_setup_failed", error=str(e))

    # Never log secret values, only whether they are present
    logger = structlog.get_logger(__name__)
    log = logger.info if settings.has_credential else logger.warning
    log(
        "startup_env_check",
        environment=settings.environment,
        environment_vars={"OPENAI_API_KEY": "SET" if settings.has_credential else "MISSING"},
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
        max_body_bytes=settings.MAX_BODY_BYTES,
    )
    return settings
