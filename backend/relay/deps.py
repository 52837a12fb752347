"""
FastAPI dependencies for settings and the completion client.
"""
from __future__ import annotations

from fastapi import Depends, Request

from relay.client import CompletionClient
from relay.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_completion_client(settings: Settings = Depends(get_app_settings)) -> CompletionClient:
    """Build a completion client bound to the app's settings."""
    return CompletionClient(settings)
