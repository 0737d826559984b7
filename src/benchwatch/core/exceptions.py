"""Custom exceptions for benchwatch.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from BenchwatchError for easy catching.
"""

from __future__ import annotations


class BenchwatchError(Exception):
    """Base exception for all benchwatch errors.

    Example:
        >>> try:
        ...     threshold = new_threshold(ThresholdKind.DELTA)
        ... except BenchwatchError as e:
        ...     print(f"benchwatch error: {e}")
    """


class ConfigurationError(BenchwatchError):
    """Raised when a threshold or settings configuration is invalid.

    Thresholds validate their parameters at construction time, so a
    missing delta or percentage surfaces here and never during evaluation.

    Example:
        >>> raise ConfigurationError("Delta threshold requires a delta value")
    """

