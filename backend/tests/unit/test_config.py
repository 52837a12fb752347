"""
Unit tests for configuration management (config.py).
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from relay import constants
from relay.config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove provider variables so constants supply the defaults."""
    for var in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_MODEL", "MAX_BODY_BYTES", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestSettingsDefaults:
    """Defaults come from constants.CONSTANTS."""

    def test_provider_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.OPENAI_BASE_URL == "https://api.openai.com/v1"
        assert settings.OPENAI_MODEL == "gpt-4o-mini"
        assert settings.OPENAI_API_KEY is None
        assert settings.has_credential is False

    def test_relay_tuning_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.CHAT_TEMPERATURE == 0.6
        assert settings.CHAT_MAX_TOKENS == 400
        assert settings.TITLE_TEMPERATURE == 0.2
        assert settings.TITLE_MAX_TOKENS == 260
        assert settings.DEFAULT_MAX_TOKENS == 300

    def test_cors_is_permissive(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.CORS_ALLOW_ORIGINS == ["*"]
        assert settings.CORS_ALLOW_CREDENTIALS is False

    def test_log_settings_follow_environment(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.LOG_LEVEL == constants.CONSTANTS["LOG_LEVEL"]
        assert settings.LOG_FORMAT == constants.CONSTANTS["LOG_FORMAT"]
        assert settings.environment == constants.ENVIRONMENT


class TestSettingsOverrides:
    """Environment variables and init kwargs override constants."""

    def test_env_overrides_constants(self, clean_env):
        clean_env.setenv("OPENAI_MODEL", "other-model")
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv("MAX_BODY_BYTES", "2048")

        settings = Settings(_env_file=None)

        assert settings.OPENAI_MODEL == "other-model"
        assert settings.OPENAI_API_KEY == "sk-test"
        assert settings.MAX_BODY_BYTES == 2048
        assert settings.has_credential is True

    def test_base_url_trailing_slash_stripped(self, clean_env):
        clean_env.setenv("OPENAI_BASE_URL", "http://localhost:8080/v1///")

        settings = Settings(_env_file=None)

        assert settings.OPENAI_BASE_URL == "http://localhost:8080/v1"

    def test_empty_key_is_not_a_credential(self, clean_env):
        settings = Settings(_env_file=None, OPENAI_API_KEY="")

        assert settings.has_credential is False

    def test_key_excluded_from_dump(self, clean_env):
        settings = Settings(_env_file=None, OPENAI_API_KEY="sk-secret")

        assert "OPENAI_API_KEY" not in settings.model_dump()


def test_settings_are_immutable(clean_env):
    settings = Settings(_env_file=None)

    with pytest.raises(ValidationError):
        settings.OPENAI_MODEL = "changed"
