"""Configuration tests — defaults, env overrides, validation, caching."""

import pytest
from pydantic import ValidationError

from object_record.config import Settings, get_settings


def test_defaults():
    settings = Settings()
    assert settings.typename_key == "__typename"
    assert settings.log_format == "json"
    assert settings.log_cache_misses is True


def test_env_prefix_override(monkeypatch):
    monkeypatch.setenv("OBJECT_RECORD_LOG_LEVEL", "DEBUG")
    assert Settings().log_level == "DEBUG"


def test_blank_typename_key_rejected():
    with pytest.raises(ValidationError):
        Settings(typename_key="  ")


def test_invalid_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(log_format="xml")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
