from __future__ import annotations

import pytest
from pydantic import ValidationError

from funnel_builder.config import Settings


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("FUNNEL_LINT_ON_MUTATION", raising=False)

    config = Settings(_env_file=None)

    assert config.LOG_LEVEL == "INFO"
    assert config.FUNNEL_DEFAULT_CURRENCY == "USD"
    assert config.FUNNEL_LINT_ON_MUTATION is False


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("FUNNEL_DEFAULT_CURRENCY", "eur")
    monkeypatch.setenv("FUNNEL_LINT_ON_MUTATION", "true")

    config = Settings(_env_file=None)

    assert config.LOG_LEVEL == "DEBUG"
    assert config.FUNNEL_DEFAULT_CURRENCY == "EUR"
    assert config.FUNNEL_LINT_ON_MUTATION is True


def test_settings_reject_bad_values(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("FUNNEL_DEFAULT_CURRENCY", "dollars")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
