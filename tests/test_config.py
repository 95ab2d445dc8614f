"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lifecountdown.config import CountdownConfig, get_config


def test_defaults(monkeypatch):
    """Test the built-in defaults."""
    for name in ("STORAGE_PATH", "LOCALE", "TIMEZONE", "TICK_INTERVAL", "DEFAULT_TARGET_AGE"):
        monkeypatch.delenv(f"LIFE_COUNTDOWN_{name}", raising=False)

    config = CountdownConfig(_env_file=None)

    assert config.storage_path == Path("~/.life-countdown/storage.json")
    assert config.locale == "ja"
    assert config.timezone is None
    assert config.tick_interval == 1.0
    assert config.default_target_age == 80


def test_environment_overrides(monkeypatch, tmp_path):
    """Test LIFE_COUNTDOWN_ environment variables."""
    monkeypatch.setenv("LIFE_COUNTDOWN_STORAGE_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("LIFE_COUNTDOWN_LOCALE", "en")
    monkeypatch.setenv("LIFE_COUNTDOWN_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("LIFE_COUNTDOWN_TICK_INTERVAL", "0.5")

    config = CountdownConfig(_env_file=None)

    assert config.storage_path == tmp_path / "s.json"
    assert config.locale == "en"
    assert config.timezone == "Asia/Tokyo"
    assert config.tick_interval == 0.5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"locale": "fr"},
        {"timezone": "Mars/Olympus_Mons"},
        {"tick_interval": 0},
        {"default_target_age": 151},
    ],
)
def test_invalid_values_rejected(kwargs):
    """Test field validation."""
    with pytest.raises(ValidationError):
        CountdownConfig(_env_file=None, **kwargs)


def test_get_config_is_cached():
    """Test that get_config returns a shared instance until cleared."""
    get_config.cache_clear()
    try:
        assert get_config() is get_config()
    finally:
        get_config.cache_clear()
