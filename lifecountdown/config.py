"""
Configuration for lifecountdown.

Uses pydantic-settings: every field can be overridden with a
``LIFE_COUNTDOWN_``-prefixed environment variable or a ``.env`` file.
"""

from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lifecountdown.settings import MAX_TARGET_AGE, MIN_TARGET_AGE
from lifecountdown.units import DEFAULT_LOCALE, Locale


class CountdownConfig(BaseSettings):
    """Runtime settings for the countdown shell."""

    model_config = SettingsConfigDict(
        env_prefix="LIFE_COUNTDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    storage_path: Path = Field(
        default=Path("~/.life-countdown/storage.json"),
        description="JSON file holding the persisted settings and unit",
    )
    locale: Locale = Field(
        default=DEFAULT_LOCALE,
        description="Language for unit labels and validation messages",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA zone whose midnight ends the countdown; local zone if unset",
    )
    tick_interval: float = Field(
        default=1.0,
        gt=0,
        description="Seconds between re-renders",
    )
    default_target_age: int = Field(
        default=80,
        ge=MIN_TARGET_AGE,
        le=MAX_TARGET_AGE,
        description="Target age pre-filled in the settings form",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v!r}") from exc
        return v


@lru_cache
def get_config() -> CountdownConfig:
    """
    Get the configuration (cached).

    Call get_config.cache_clear() to reload after changing the environment.
    """
    return CountdownConfig()
