"""
structlog on top of stdlib logging for the relay.

Relay code logs through ``structlog.get_logger(__name__)``; uvicorn and httpx
log through stdlib. Both end up on one stdout handler rendered as JSON (prd)
or coloured console lines (dev).
"""
from __future__ import annotations

import logging.config
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from relay.config import Settings

# Loggers that follow LOG_LEVEL. uvicorn is included because main() starts it
# with log_config=None, leaving its loggers to this config.
RELAY_LOGGERS = ("relay", "uvicorn", "uvicorn.error", "uvicorn.access")

# httpx logs every outbound request at INFO; client.py already reports those.
QUIET_LOGGERS = ("httpx", "httpcore")


def drop_none_values(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Remove keys bound to ``None`` (e.g. ``upstream_status`` on a 400)."""
    return {key: value for key, value in event_dict.items() if value is not None}


SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def configure_structlog() -> None:
    """Route structlog events into stdlib logging. Call once at startup."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class StructlogJSONFormatter(structlog.stdlib.ProcessorFormatter):
    """One JSON object per line: event, level, logger, timestamp plus context
    such as ``path``, ``status`` and ``upstream_status``."""

    def __init__(self, *args, **kwargs):
        super().__init__(
            *args,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                drop_none_values,
                structlog.processors.JSONRenderer(ensure_ascii=False),
            ],
            foreign_pre_chain=SHARED_PROCESSORS,
            **kwargs,
        )


class StructlogConsoleFormatter(structlog.stdlib.ProcessorFormatter):
    def __init__(self, *args, **kwargs):
        super().__init__(
            *args,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                drop_none_values,
                structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
            ],
            foreign_pre_chain=SHARED_PROCESSORS,
            **kwargs,
        )


def build_logging_config(settings: Settings) -> dict:
    """dictConfig mapping for LOG_LEVEL / LOG_FORMAT.

    Any LOG_FORMAT other than ``json`` renders for the console.
    """
    level = settings.LOG_LEVEL.upper()
    formatter = "json" if settings.LOG_FORMAT == "json" else "console"

    loggers: dict[str, dict] = {
        name: {"handlers": ["stdout"], "level": level, "propagate": False}
        for name in RELAY_LOGGERS
    }
    loggers.update({name: {"level": "WARNING"} for name in QUIET_LOGGERS})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": "relay.logging.StructlogJSONFormatter"},
            "console": {"()": "relay.logging.StructlogConsoleFormatter"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["stdout"], "level": level},
        "loggers": loggers,
    }


def setup_logging(settings: Settings) -> None:
    logging.config.dictConfig(build_logging_config(settings))
