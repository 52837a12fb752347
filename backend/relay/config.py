"""
Configuration management: constants + environment variables with validation.
"""
from __future__ import annotations

import threading
from typing import Any

import structlog
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from relay import constants

logger = structlog.get_logger(__name__)


def _load_constants_config(settings_fields: set[str]) -> dict[str, Any]:
    """Load configuration defaults from the constants module.

    Only constants that are declared on Settings are returned.
    """
    logger.debug(
        "loading_constants_config",
        environment=constants.ENVIRONMENT,
        has_log_level="LOG_LEVEL" in constants.CONSTANTS,
        has_log_format="LOG_FORMAT" in constants.CONSTANTS,
    )
    return {
        key: value
        for key, value in constants.CONSTANTS.items()
        if key in settings_fields
    }


class ConstantsConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads configuration from constants.py."""

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        self._settings_cls = settings_cls

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return super().get_field_value(field, field_name)

    def __call__(self) -> dict[str, Any]:
        settings_fields = set(self._settings_cls.model_fields.keys())
        return _load_constants_config(settings_fields)


class Settings(BaseSettings):
    """Process-wide read-only settings, resolved once at startup."""

    # App metadata
    APP_NAME: str
    APP_VERSION: str
    HOST: str
    PORT: int

    # Logging
    LOG_LEVEL: str
    LOG_FORMAT: str

    # CORS
    CORS_ALLOW_ORIGINS: list[str]
    CORS_ALLOW_CREDENTIALS: bool

    # Inbound body cap
    MAX_BODY_BYTES: int

    # Completion provider
    OPENAI_API_KEY: str | None = Field(default=None, exclude=True)
    OPENAI_BASE_URL: str
    OPENAI_MODEL: str
    PROVIDER_TIMEOUT_SECONDS: float | None

    # Sampling
    DEFAULT_TEMPERATURE: float
    DEFAULT_MAX_TOKENS: int
    CHAT_TEMPERATURE: float
    CHAT_MAX_TOKENS: int
    TITLE_TEMPERATURE: float
    TITLE_MAX_TOKENS: int

    @field_validator("OPENAI_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @computed_field
    @property
    def environment(self) -> str:
        """Current environment (dev or prd)."""
        return constants.ENVIRONMENT

    @property
    def has_credential(self) -> bool:
        return bool(self.OPENAI_API_KEY)

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=True,
        populate_by_name=True,
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources: init, env, .env file, then constants."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            ConstantsConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from constants and environment variables.

        A missing OPENAI_API_KEY is not a load failure; the relays report it
        per request so /health keeps answering.
        """
        return cls()


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get Settings instance (thread-safe singleton)."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings.load()
    return _settings_instance
