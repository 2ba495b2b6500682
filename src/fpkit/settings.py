"""Environment-based configuration using pydantic-settings.

Example:
    >>> from fpkit.settings import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'
    >>> settings.memoize.max_size
    1024

    # Or with environment variables:
    # FPKIT_LOG_LEVEL=DEBUG
    # FPKIT_MEMOIZE_TTL=60
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FPKIT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class MemoizeSettings(BaseSettings):
    """Defaults for ``memoize`` caches."""

    model_config = SettingsConfigDict(
        env_prefix="FPKIT_MEMOIZE_",
        extra="ignore",
    )

    max_size: PositiveInt = Field(default=1024, description="Max cached calls per memoized function")
    ttl: PositiveFloat | None = Field(default=None, description="Entry lifetime in seconds, None keeps forever")


class FpkitSettings(BaseSettings):
    """Root settings, loaded from ``FPKIT_`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="FPKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug logging")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    memoize: MemoizeSettings = Field(default_factory=MemoizeSettings)


@lru_cache(maxsize=1)
def get_settings() -> FpkitSettings:
    """Get the global settings instance (cached)."""
    return FpkitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next ``get_settings()`` re-reads the environment."""
    get_settings.cache_clear()
