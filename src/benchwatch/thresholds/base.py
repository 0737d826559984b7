"""Base class for threshold evaluators.

Every evaluator follows the same two-call contract per build:

1. ``is_valid(value)`` compares the new value against the stored baselines
   and never changes them.
2. ``advance(...)`` (or the individual setters) stores the baselines that
   the next build will be compared against.

A threshold is not thread-safe; one ingestion pipeline must own it and
call it sequentially.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import ClassVar

from benchwatch.core.exceptions import ConfigurationError
from benchwatch.thresholds.models import ThresholdKind, ThresholdState

logger = logging.getLogger(__name__)


def to_number(value: float | int) -> float:
    """Convert an evaluated value to the canonical float form.

    Raises:
        TypeError: If the value is not an int or float. Strings are not
            parsed.
    """
    if isinstance(value, (str, bytes)):
        msg = f"Threshold values must be numbers, got {type(value).__name__}"
        raise TypeError(msg)
    return float(value)


def require_parameter(kind: ThresholdKind, name: str, value: float | int | None) -> float:
    """Validate a required construction parameter.

    Raises:
        ConfigurationError: If the parameter is missing or not finite.
    """
    if value is None:
        msg = f"{kind.display_name} requires a {name} value"
        raise ConfigurationError(msg)
    return optional_parameter(kind, name, value)


def optional_parameter(kind: ThresholdKind, name: str, value: float | int | None) -> float | None:
    """Validate an optional construction parameter."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        msg = f"{kind.display_name}: {name} must be a number, got {value!r}"
        raise ConfigurationError(msg) from e
    if not math.isfinite(number):
        msg = f"{kind.display_name}: {name} must be finite, got {value!r}"
        raise ConfigurationError(msg)
    return number


def guards_decrease(margin: float) -> bool:
    """Whether a signed margin guards against decreases.

    The sign bit decides, so -0.0 guards decreases and 0.0 guards increases.
    """
    return math.copysign(1.0, margin) < 0


class Threshold(ABC):
    """Abstract threshold evaluator.

    Subclasses implement check(), a pure rule over a value and a state.

    Attributes:
        kind: The comparison mode implemented by the subclass.
        test_group: Group of the metric this threshold applies to.
        test_name: Name of the metric this threshold applies to.
        state: Baselines stored for the next evaluation.
    """

    kind: ClassVar[ThresholdKind]

    def __init__(self, test_group: str = "", test_name: str = "") -> None:
        self.test_group = test_group
        self.test_name = test_name
        self.state = ThresholdState()

    @property
    def name(self) -> str:
        """Human-readable name of the threshold kind."""
        return self.kind.display_name

    @property
    def seeded(self) -> bool:
        return self.state.seeded

    @abstractmethod
    def check(self, value: float, state: ThresholdState) -> bool:
        """Apply the threshold rule against an explicit state.

        Args:
            value: The new value.
            state: Baselines to compare against.

        Returns:
            True if the value satisfies the threshold.
        """

    @abstractmethod
    def describe(self) -> str:
        """Short description of the configured bounds."""

    def is_valid(self, value: float | int) -> bool:
        """Evaluate a new value against the stored baselines.

        Does not modify the state.

        Args:
            value: The new value (int or float).

        Returns:
            True if the value satisfies the threshold, always True while
            the threshold has no baseline.
        """
        number = to_number(value)
        if not self.state.seeded:
            return True

        valid = self.check(number, self.state)
        if not valid:
            logger.debug(f"{self.describe()} rejected {number} for '{self.target}' with {self.state}")
        return valid

    def advance(
        self,
        *,
        previous: float | None,
        average: float | None,
        maximum: float | None,
        minimum: float | None,
    ) -> None:
        """Store the baselines for the next evaluation.

        Args:
            previous: Value of the build just evaluated.
            average: Running average including that build.
            maximum: Reported maximum including that build.
            minimum: Reported minimum including that build.
        """
        self.set_previous_value(previous)
        self.set_average_value(average)
        self.set_maximum_value(maximum)
        self.set_minimum_value(minimum)

    def reset(self) -> None:
        """Drop all baselines, returning the threshold to the unseeded state."""
        self.state = ThresholdState()

    def set_previous_value(self, value: float | None) -> None:
        self.state.previous_value = None if value is None else float(value)

    def set_average_value(self, value: float | None) -> None:
        self.state.average_value = None if value is None else float(value)

    def set_maximum_value(self, value: float | None) -> None:
        self.state.maximum_value = None if value is None else float(value)

    def set_minimum_value(self, value: float | None) -> None:
        self.state.minimum_value = None if value is None else float(value)

    @property
    def target(self) -> str:
        """Metric this threshold applies to, as "group/name"."""
        if self.test_group and self.test_name:
            return f"{self.test_group}/{self.test_name}"
        return self.test_group or self.test_name or "*"

    def applies_to(self, test_group: str, test_name: str) -> bool:
        """Check whether the threshold targets a metric.

        Empty group or name on the threshold match anything.
        """
        return (not self.test_group or self.test_group == test_group) and (
            not self.test_name or self.test_name == test_name
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()}, target={self.target!r})"
