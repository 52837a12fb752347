"""
Application constants and configuration defaults.

Secrets Reference
=================

- OPENAI_API_KEY: Bearer credential for the completion provider (required for
  /api/chat and /api/title, not for /health)
- OPENAI_BASE_URL: Provider base URL (optional, defaults below)
- OPENAI_MODEL: Provider model identifier (optional, defaults below)
"""

from __future__ import annotations

import os
from typing import Any, Literal

ENVIRONMENT: Literal["dev", "prd"] = "prd" if os.getenv("ENVIRONMENT") == "prd" else "dev"

# Defaults
CONSTANTS: dict[str, Any] = {
    "APP_NAME": "Completion Relay",
    "APP_VERSION": "0.1.0",
    "HOST": "0.0.0.0",
    "PORT": 3000,
    "OPENAI_BASE_URL": "https://api.openai.com/v1",
    "OPENAI_MODEL": "gpt-4o-mini",
    "PROVIDER_TIMEOUT_SECONDS": 60.0,
    # base64 data URLs for screenshots are large
    "MAX_BODY_BYTES": 10 * 1024 * 1024,
    "CORS_ALLOW_ORIGINS": ["*"],
    "CORS_ALLOW_CREDENTIALS": False,
    "DEFAULT_TEMPERATURE": 0.2,
    "DEFAULT_MAX_TOKENS": 300,
    "CHAT_TEMPERATURE": 0.6,
    "CHAT_MAX_TOKENS": 400,
    "TITLE_TEMPERATURE": 0.2,
    "TITLE_MAX_TOKENS": 260,
}

# dev
if ENVIRONMENT == "dev":
    CONSTANTS.update({
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "console",
    })

# prd
if ENVIRONMENT == "prd":
    CONSTANTS.update({
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "json",
    })
