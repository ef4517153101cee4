"""
Configuration for semdag.

Settings are read from environment variables prefixed with ``SEMDAG_``.

Invariants:
    - Defaults suit local development; nothing is required
    - get_settings() parses the environment once; call
      get_settings.cache_clear() to reload

Environment:
    SEMDAG_LOG_LEVEL        Level of the 'semdag' logger (default WARNING)
    SEMDAG_LOG_FORMAT       'text' or 'json' (default text)
    SEMDAG_VALIDATE_INPUT   Default for apply(validate_input=...) (default true)
    SEMDAG_VALIDATE_OUTPUT  Default for apply(validate_output=...) (default true)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """semdag configuration."""

    # Logging
    log_level: str = Field(default="WARNING", description="Level of the 'semdag' logger")
    log_format: Literal["text", "json"] = Field(default="text")

    # Defaults for engine.apply()
    validate_input: bool = Field(default=True, description="Parse inputs with the source Type")
    validate_output: bool = Field(default=True, description="Parse outputs with the target Type")

    model_config = SettingsConfigDict(env_prefix="SEMDAG_")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get the cached Settings instance."""
    return Settings()
