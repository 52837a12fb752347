"""
Title relay: image (+ hint text) in, structured product title out.

The wire reply is always a flat string. Internally the outcome is tagged:
``StructuredTitle`` when the model's text parsed as JSON (the reply is the
re-serialized value) and ``RawFallback`` when it did not (the reply is the
model's text verbatim). Callers of the HTTP endpoint tell the two apart by
attempting their own parse of ``reply``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import structlog
from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from relay.client import CompletionClient, Message, image_part, text_part
from relay.config import Settings
from relay.errors import ConfigurationError, ValidationError
from relay.prompts import TITLE_SYSTEM_PROMPT, build_title_user_text

logger = structlog.get_logger(__name__)


class DetailMode(str, Enum):
    LOW = "low"
    HIGH = "high"

    @classmethod
    def from_high_res(cls, high_res: bool | None) -> "DetailMode":
        return cls.HIGH if high_res else cls.LOW


class TitleResult(BaseModel):
    """Shape the title prompt asks the model to produce."""
    title: str
    object_ranked: list[str] = Field(default_factory=list, max_length=4)
    tail_ranked: list[str] = Field(default_factory=list, max_length=4)


@dataclass(frozen=True)
class StructuredTitle:
    value: Any
    reply: str

    is_structured = True


@dataclass(frozen=True)
class RawFallback:
    reply: str

    is_structured = False


TitleOutcome = Union[StructuredTitle, RawFallback]


def shape_title_reply(raw: str) -> TitleOutcome:
    """Parse the model's text as JSON, falling back to the raw text."""
    try:
        value = json.loads(raw)
    except (ValueError, TypeError):
        logger.warning("title_reply_not_json", raw_length=len(raw) if raw else 0)
        return RawFallback(reply=raw)

    try:
        TitleResult.model_validate(value)
    except SchemaError as e:
        # Relayed as parsed either way
        logger.warning("title_reply_schema_mismatch", error_count=e.error_count())

    return StructuredTitle(
        value=value,
        reply=json.dumps(value, ensure_ascii=False, separators=(",", ":")),
    )


def select_image(image_url: str | None, image_data_url: str | None) -> str:
    """Pick the image reference, preferring the inline data URL."""
    if image_data_url:
        return image_data_url
    if image_url:
        return image_url
    raise ValidationError("imageUrl or imageDataUrl is required")


def build_title_messages(image: str, hint_text: str, detail: DetailMode) -> list[Message]:
    return [
        {"role": "system", "content": TITLE_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                text_part(build_title_user_text(hint_text, detail.value)),
                image_part(image, detail.value),
            ],
        },
    ]


async def run_title(
    settings: Settings,
    client: CompletionClient,
    image_url: str | None = None,
    image_data_url: str | None = None,
    hint_text: str | None = "",
    high_res: bool | None = False,
) -> TitleOutcome:
    """Ask the model for a title suggestion for one image."""
    if not settings.has_credential:
        raise ConfigurationError()

    image = select_image(image_url, image_data_url)
    detail = DetailMode.from_high_res(high_res)

    raw = await client.complete(
        build_title_messages(image, hint_text or "", detail),
        temperature=settings.TITLE_TEMPERATURE,
        max_tokens=settings.TITLE_MAX_TOKENS,
    )
    outcome = shape_title_reply(raw)

    logger.info(
        "title_relay_completed",
        detail=detail.value,
        inline_image=bool(image_data_url),
        structured=outcome.is_structured,
        reply_length=len(outcome.reply),
    )
    return outcome
