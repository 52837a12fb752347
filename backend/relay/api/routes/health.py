"""
Health check endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter

from relay.api.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint that doesn't require the provider credential."""
    return {"status": "ok"}
