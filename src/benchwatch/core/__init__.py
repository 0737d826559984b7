"""Core module for benchwatch.

This module contains the exceptions and configuration used throughout
the library.
"""

from __future__ import annotations

from benchwatch.core.config import Settings, configure_logging, load_settings
from benchwatch.core.exceptions import (
    BenchwatchError,
    ConfigurationError,
)

__all__ = [
    "BenchwatchError",
    "ConfigurationError",
    "Settings",
    "configure_logging",
    "load_settings",
]
