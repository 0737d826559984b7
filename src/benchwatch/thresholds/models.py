"""Models for threshold evaluation.

This module provides the ThresholdKind enumeration and the explicit
ThresholdState carried by every evaluator between builds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ThresholdKind(str, Enum):
    """Closed set of threshold comparison modes.

    Values are the identifiers used in threshold configuration files.
    """

    ABSOLUTE = "absolute"
    PERCENTAGE = "percentage"
    PERCENTAGE_AVERAGE = "percentageaverage"
    DELTA = "delta"
    DELTA_AVERAGE = "deltaaverage"
    DELTA_MONOTONIC = "deltamonotonic"

    @classmethod
    def resolve(cls, name: str) -> ThresholdKind | None:
        """Look up a kind by identifier, ignoring case and separators.

        Args:
            name: Identifier such as "deltaMonotonic" or "delta_average".

        Returns:
            The matching kind, or None if the name is unknown or not a string.
        """
        if not isinstance(name, str):
            return None
        key = name.strip().lower().replace("_", "").replace("-", "")
        for kind in cls:
            if kind.value == key:
                return kind
        return None

    @property
    def display_name(self) -> str:
        """Human-readable label."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[ThresholdKind, str] = {
    ThresholdKind.ABSOLUTE: "Absolute threshold",
    ThresholdKind.PERCENTAGE: "Percentage from last value",
    ThresholdKind.PERCENTAGE_AVERAGE: "Percentage from average",
    ThresholdKind.DELTA: "Delta from last value",
    ThresholdKind.DELTA_AVERAGE: "Delta from average",
    ThresholdKind.DELTA_MONOTONIC: "Monotonic with delta margin",
}


@dataclass
class ThresholdState:
    """Baselines a threshold compares the next value against.

    All fields start as None. The ingestion pipeline advances them once per
    build, after the build's value has been evaluated.

    Attributes:
        previous_value: Value of the last usable build.
        average_value: Running average over usable builds.
        maximum_value: Reported historical maximum.
        minimum_value: Reported historical minimum.
    """

    previous_value: float | None = None
    average_value: float | None = None
    maximum_value: float | None = None
    minimum_value: float | None = None

    @property
    def seeded(self) -> bool:
        """Whether any baseline has been recorded yet."""
        return any(
            v is not None
            for v in (self.previous_value, self.average_value, self.maximum_value, self.minimum_value)
        )
