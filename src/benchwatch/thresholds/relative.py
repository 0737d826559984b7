"""Thresholds relative to the previous value or the running average.

Percentage and delta margins are signed: a negative margin guards against
a decrease beyond the margin, a positive one against an increase. Values
exactly on the bound pass.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import ClassVar

from benchwatch.thresholds.base import Threshold, guards_decrease, require_parameter
from benchwatch.thresholds.models import ThresholdKind, ThresholdState


class RelativeThreshold(Threshold):
    """One-sided comparison of a value against a single baseline.

    Attributes:
        margin: Signed percentage or delta.
    """

    margin_name: ClassVar[str]
    baseline_field: ClassVar[str]

    def __init__(self, margin: float | None, test_group: str = "", test_name: str = "") -> None:
        super().__init__(test_group, test_name)
        self.margin = require_parameter(self.kind, self.margin_name, margin)

    def baseline(self, state: ThresholdState) -> float | None:
        value: float | None = getattr(state, self.baseline_field)
        return value

    @abstractmethod
    def bound(self, baseline: float) -> float:
        """Limit derived from the baseline and the margin."""

    def check(self, value: float, state: ThresholdState) -> bool:
        baseline = self.baseline(state)
        if baseline is None:
            return True

        limit = self.bound(baseline)
        if guards_decrease(self.margin):
            return not value < limit
        return not value > limit

    def describe(self) -> str:
        source = "average" if self.baseline_field == "average_value" else "previous"
        unit = "%" if self.margin_name == "percentage" else ""
        return f"{self.margin_name}({self.margin:+g}{unit} from {source})"


class PercentageThreshold(RelativeThreshold):
    """Limit the percentage change from the previous value.

    Example:
        >>> threshold = PercentageThreshold(-5.0)
        >>> threshold.set_previous_value(100.0)
        >>> threshold.is_valid(96.0), threshold.is_valid(94.0)
        (True, False)
    """

    kind = ThresholdKind.PERCENTAGE
    margin_name = "percentage"
    baseline_field = "previous_value"

    @property
    def percentage(self) -> float:
        return self.margin

    def bound(self, baseline: float) -> float:
        # Scaled by magnitude so a negative baseline keeps the margin direction.
        return baseline + abs(baseline) * self.margin / 100.0


class PercentageAverageThreshold(PercentageThreshold):
    """Limit the percentage change from the running average."""

    kind = ThresholdKind.PERCENTAGE_AVERAGE
    baseline_field = "average_value"


class DeltaThreshold(RelativeThreshold):
    """Limit the absolute change from the previous value.

    Example:
        >>> threshold = DeltaThreshold(0.5)
        >>> threshold.set_previous_value(2.0)
        >>> threshold.is_valid(2.5), threshold.is_valid(2.6)
        (True, False)
    """

    kind = ThresholdKind.DELTA
    margin_name = "delta"
    baseline_field = "previous_value"

    @property
    def delta(self) -> float:
        return self.margin

    def bound(self, baseline: float) -> float:
        return baseline + self.margin


class DeltaAverageThreshold(DeltaThreshold):
    """Limit the absolute change from the running average."""

    kind = ThresholdKind.DELTA_AVERAGE
    baseline_field = "average_value"
