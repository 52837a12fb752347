"""
Pydantic models for API requests and responses.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from relay.flows.title import TitleResult

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "TitleRequest",
    "TitleResponse",
    "TitleResult",
]


class ChatRequest(BaseModel):
    """Request model for chat endpoint.

    ``message`` is optional here so a missing value reaches the relay and is
    reported as ``400 {"error": "message is required"}``.
    """
    message: str | None = None


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""
    reply: str


class TitleRequest(BaseModel):
    """Request model for title endpoint (camelCase on the wire)."""
    model_config = ConfigDict(populate_by_name=True)

    image_url: str | None = Field(default=None, alias="imageUrl")
    image_data_url: str | None = Field(default=None, alias="imageDataUrl")
    hint_text: str | None = Field(default="", alias="hintText")
    high_res: bool | None = Field(default=False, alias="highRes")


class TitleResponse(BaseModel):
    """Response model for title endpoint.

    ``reply`` is either a JSON-encoded TitleResult or, when the model's output
    did not parse, the model's raw text.
    """
    reply: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
