"""
Error taxonomy for the relays.

Every error carries the HTTP status it is surfaced with; the exception
handlers in relay.api.middleware render them as ``{"error": message}``.
"""
from __future__ import annotations

from fastapi import status


class RelayError(Exception):
    """Base class for errors reported to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RelayError):
    """Malformed or incomplete caller input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(RelayError):
    """Required configuration (the provider credential) is absent."""

    def __init__(self, message: str = "OPENAI_API_KEY is not set"):
        super().__init__(message)


class ProviderError(RelayError):
    """The completion provider failed or answered with something unusable.

    ``upstream_status`` is kept for logging only; callers always see 500.
    """

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status
