"""
Title relay endpoint.

The reply stays a flat string field because the browser extension that calls
this endpoint reads ``reply`` as text and parses it itself.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from relay.api.models import ErrorResponse, TitleRequest, TitleResponse
from relay.client import CompletionClient
from relay.config import Settings
from relay.deps import get_app_settings, get_completion_client
from relay.errors import RelayError
from relay.flows.title import run_title

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=TitleResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def title(
    req: TitleRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    client: CompletionClient = Depends(get_completion_client),
):
    """Ask the provider for a structured title suggestion for one image."""
    req = req or TitleRequest()
    try:
        outcome = await run_title(
            settings,
            client,
            image_url=req.image_url,
            image_data_url=req.image_data_url,
            hint_text=req.hint_text,
            high_res=req.high_res,
        )
    except RelayError:
        raise
    except Exception as e:
        logger.exception("title_relay_failed", error=str(e), error_type=type(e).__name__)
        raise RelayError(str(e) or "Internal Server Error") from e

    return TitleResponse(reply=outcome.reply)
