"""
API routes package.
"""
from __future__ import annotations

from fastapi import APIRouter

from relay.api.routes import chat, health, title

# Create main API router
api_router = APIRouter()

# Health (no credential needed)
api_router.include_router(health.router, tags=["health"])

# Relays
api_router.include_router(chat.router, prefix="/api/chat", tags=["chat"])
api_router.include_router(title.router, prefix="/api/title", tags=["title"])
