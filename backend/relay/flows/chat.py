"""
Chat relay: text in, text out.
"""
from __future__ import annotations

import structlog

from relay.client import CompletionClient, Message
from relay.config import Settings
from relay.errors import ConfigurationError, ValidationError
from relay.prompts import CHAT_SYSTEM_PROMPT

logger = structlog.get_logger(__name__)


def build_chat_messages(message: str) -> list[Message]:
    return [
        {"role": "system", "content": CHAT_SYSTEM_PROMPT},
        {"role": "user", "content": message},
    ]


async def run_chat(settings: Settings, client: CompletionClient, message: str | None) -> str:
    """Validate, forward the user's message verbatim and return the reply text."""
    if not message:
        raise ValidationError("message is required")

    if not settings.has_credential:
        raise ConfigurationError()

    reply = await client.complete(
        build_chat_messages(message),
        temperature=settings.CHAT_TEMPERATURE,
        max_tokens=settings.CHAT_MAX_TOKENS,
    )

    logger.info(
        "chat_relay_completed",
        message_length=len(message),
        reply_length=len(reply),
    )
    return reply
