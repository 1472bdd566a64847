from pathlib import Path

import pytest

from case_analytics.config import load_settings


def test_defaults():
    settings = load_settings()
    assert settings.locale == "en"
    assert settings.cache_size == 32
    assert settings.data_dir == Path("data")
    assert settings.log_level == "WARNING"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ANALYTICS_LOCALE", "BG")
    monkeypatch.setenv("ANALYTICS_CACHE_SIZE", "0")
    monkeypatch.setenv("ANALYTICS_DATA_DIR", "/tmp/exports")
    monkeypatch.setenv("ANALYTICS_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.locale == "bg"
    assert settings.cache_size == 0
    assert settings.data_dir == Path("/tmp/exports")
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("name, value", [
    ("ANALYTICS_LOCALE", "fr"),
    ("ANALYTICS_CACHE_SIZE", "many"),
    ("ANALYTICS_CACHE_SIZE", "-1"),
    ("ANALYTICS_LOG_LEVEL", "LOUD"),
])
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings()
