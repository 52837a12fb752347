"""
Unit tests for application startup.
"""
from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from relay import startup


@pytest.fixture
def quiet_startup(monkeypatch):
    """Keep the test's log capture in place while initialize_app runs."""
    monkeypatch.setattr(startup, "configure_structlog", lambda: None)
    monkeypatch.setattr(startup, "setup_logging", lambda settings: None)


def test_missing_credential_reported_once_as_warning(quiet_startup, monkeypatch, settings_factory):
    monkeypatch.setattr(startup, "get_settings", lambda: settings_factory(OPENAI_API_KEY=None))

    with capture_logs() as logs:
        settings = startup.initialize_app()

    assert settings.has_credential is False
    credential_logs = [entry for entry in logs if "OPENAI_API_KEY" in str(entry)]
    assert len(credential_logs) == 1
    assert credential_logs[0]["event"] == "startup_env_check"
    assert credential_logs[0]["log_level"] == "warning"
    assert credential_logs[0]["environment_vars"] == {"OPENAI_API_KEY": "MISSING"}


def test_credential_value_is_never_logged(quiet_startup, monkeypatch, settings_factory):
    monkeypatch.setattr(startup, "get_settings", lambda: settings_factory(OPENAI_API_KEY="sk-secret"))

    with capture_logs() as logs:
        startup.initialize_app()

    assert logs[0]["log_level"] == "info"
    assert logs[0]["environment_vars"] == {"OPENAI_API_KEY": "SET"}
    assert "sk-secret" not in str(logs)
