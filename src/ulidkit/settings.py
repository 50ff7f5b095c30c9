"""Settings for ulidkit, loaded from ``ULIDKIT_*`` environment variables."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
ALLOWED_LOG_FORMATS = frozenset({"console", "json"})


def ulidkit_settings_config() -> SettingsConfigDict:
    """Return the standard ulidkit ``BaseSettings`` config dict."""

    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ULIDKIT_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        str_strip_whitespace=True,
    )


def create_settings_accessors[T](
    settings_type: type[T],
) -> tuple[Callable[[], T], Callable[[], T]]:
    """Create ``get_settings`` and ``reload_settings`` helpers for a settings class."""

    @lru_cache(maxsize=1)
    def _build() -> T:
        return settings_type()

    def get_settings() -> T:
        return _build()

    def reload_settings() -> T:
        _build.cache_clear()
        return _build()

    return get_settings, reload_settings


def normalize_log_format(value: str, *, env_var: str = "ULIDKIT_LOG_FORMAT") -> str:
    normalized = value.strip().lower()
    if normalized not in ALLOWED_LOG_FORMATS:
        allowed = ", ".join(sorted(ALLOWED_LOG_FORMATS))
        raise ValueError(f"{env_var} must be one of: {allowed}.")
    return normalized


def normalize_log_level(value: str, *, env_var: str = "ULIDKIT_LOG_LEVEL") -> str:
    normalized = value.strip().upper()
    if normalized not in ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(ALLOWED_LOG_LEVELS))
        raise ValueError(f"{env_var} must be one of: {allowed}.")
    return normalized


class Settings(BaseSettings):
    """Generator policy and logging options."""

    model_config = ulidkit_settings_config()

    randomness: Literal["fast", "crypto"] = Field(
        default="fast",
        description="Default entropy policy for generated ULIDs.",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for a reproducible caller-owned generator.",
    )
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")

    @field_validator("randomness", mode="before")
    @classmethod
    def _normalize_randomness(cls, value: object) -> object:
        if value is None:
            return "fast"
        return str(value).strip().lower()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        return normalize_log_level(str(value))

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, value: object) -> str:
        return normalize_log_format(str(value))


get_settings, reload_settings = create_settings_accessors(Settings)


__all__ = [
    "ALLOWED_LOG_FORMATS",
    "ALLOWED_LOG_LEVELS",
    "Settings",
    "create_settings_accessors",
    "get_settings",
    "normalize_log_format",
    "normalize_log_level",
    "reload_settings",
    "ulidkit_settings_config",
]
