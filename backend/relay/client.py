"""
Completion client: one outbound call to a chat-completion HTTP API.
"""
from __future__ import annotations

from typing import Any, Literal, TypedDict, Union

import httpx
import structlog

from relay.config import Settings
from relay.errors import ConfigurationError, ProviderError

logger = structlog.get_logger(__name__)


class TextPart(TypedDict):
    type: Literal["text"]
    text: str


class ImageURL(TypedDict):
    url: str
    detail: str


class ImagePart(TypedDict):
    type: Literal["image_url"]
    image_url: ImageURL


ContentPart = Union[TextPart, ImagePart]


class Message(TypedDict):
    role: Literal["system", "user"]
    content: str | list[ContentPart]


def text_part(text: str) -> TextPart:
    return {"type": "text", "text": text}


def image_part(url: str, detail: str) -> ImagePart:
    return {"type": "image_url", "image_url": {"url": url, "detail": detail}}


def _provider_error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of a failed provider response, if any."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return f"provider error ({response.status_code})"


def extract_content(payload: Any) -> str:
    """Return ``choices[0].message.content`` or an empty string."""
    if not isinstance(payload, dict):
        return ""
    choices = payload.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""


class CompletionClient:
    """Calls ``POST {base_url}/chat/completions`` and extracts the answer text.

    A fresh ``httpx.AsyncClient`` is opened for every call. ``transport`` lets
    tests swap the network for an ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.settings.OPENAI_BASE_URL}/chat/completions"

    async def complete(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Send one completion request and return the reply text.

        Raises:
            ConfigurationError: no credential configured (nothing is sent).
            ProviderError: transport failure, non-2xx status, or a 2xx body
                that is not JSON.
        """
        if not self.settings.has_credential:
            raise ConfigurationError()

        body = {
            "model": self.settings.OPENAI_MODEL,
            "messages": messages,
            "temperature": self.settings.DEFAULT_TEMPERATURE if temperature is None else temperature,
            "max_tokens": self.settings.DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.OPENAI_API_KEY}",
        }

        logger.debug(
            "provider_request_started",
            endpoint=self.endpoint,
            model=body["model"],
            message_count=len(messages),
            temperature=body["temperature"],
            max_tokens=body["max_tokens"],
        )

        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.settings.PROVIDER_TIMEOUT_SECONDS,
            ) as client:
                response = await client.post(self.endpoint, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                "provider_request_failed",
                endpoint=self.endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ProviderError(str(e) or f"{type(e).__name__}: provider request failed") from e

        if not response.is_success:
            message = _provider_error_message(response)
            logger.error(
                "provider_error_response",
                status=response.status_code,
                error=message,
            )
            raise ProviderError(message, upstream_status=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(
                "provider_response_unparseable",
                status=response.status_code,
                error=str(e),
            )
            raise ProviderError("provider returned an unparseable response", upstream_status=response.status_code) from e

        content = extract_content(payload)
        logger.debug(
            "provider_request_completed",
            status=response.status_code,
            content_length=len(content),
        )
        return content
