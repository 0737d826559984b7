"""Configuration management for benchwatch.

This module provides configuration classes using pydantic-settings
for environment variable management and validation.
"""

from __future__ import annotations

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from benchwatch.core.exceptions import ConfigurationError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be configured via environment variables with
    the BENCHWATCH_ prefix.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        thresholds_file: Default YAML file with threshold definitions.

    Example:
        >>> # export BENCHWATCH_LOG_LEVEL=DEBUG
        >>> settings = Settings()
        >>> settings.log_level
        'DEBUG'

    Environment Variables:
        BENCHWATCH_LOG_LEVEL: Logging level (default: WARNING)
        BENCHWATCH_THRESHOLDS_FILE: Threshold definitions (optional)
    """

    model_config = SettingsConfigDict(
        env_prefix="BENCHWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    thresholds_file: str | None = Field(
        default=None,
        description="Default YAML file with threshold definitions",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level


def load_settings() -> Settings:
    """Load settings from the environment.

    Raises:
        ConfigurationError: If an environment variable holds an invalid value.
    """
    try:
        return Settings()
    except ValidationError as e:
        msg = f"Invalid benchwatch settings: {e.errors()[0]['msg']}"
        raise ConfigurationError(msg) from e


def configure_logging(level: str | None = None) -> None:
    """Set the level of the benchwatch package logger.

    Args:
        level: Logging level name. Defaults to Settings().log_level.

    Raises:
        ConfigurationError: If the level is not a known logging level.
    """
    if level is None:
        level = load_settings().log_level
    if level.upper() not in _LOG_LEVELS:
        msg = f"Unknown log level: {level}"
        raise ConfigurationError(msg)

    package_logger = logging.getLogger("benchwatch")
    package_logger.setLevel(level.upper())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
