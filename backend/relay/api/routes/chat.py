"""
Chat relay endpoint.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from relay.api.models import ChatRequest, ChatResponse, ErrorResponse
from relay.client import CompletionClient
from relay.config import Settings
from relay.deps import get_app_settings, get_completion_client
from relay.errors import RelayError
from relay.flows.chat import run_chat

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    req: ChatRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    client: CompletionClient = Depends(get_completion_client),
):
    """Forward the caller's message to the completion provider and return its reply."""
    try:
        reply = await run_chat(settings, client, req.message if req else None)
    except RelayError:
        raise
    except Exception as e:
        logger.exception("chat_relay_failed", error=str(e), error_type=type(e).__name__)
        raise RelayError(str(e) or "Internal Server Error") from e

    return ChatResponse(reply=reply)
