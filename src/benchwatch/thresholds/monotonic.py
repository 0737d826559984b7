"""Monotonic trend threshold with a delta margin."""

from __future__ import annotations

from benchwatch.thresholds.base import Threshold, guards_decrease, require_parameter
from benchwatch.thresholds.models import ThresholdKind, ThresholdState


class DeltaMonotonicThreshold(Threshold):
    """Require a monotonic trend, allowing a slack of ``delta``.

    With a positive delta the series must keep increasing: a value falling
    more than delta below the historical maximum is rejected. With a
    negative delta the series must keep decreasing: a value rising more
    than |delta| above the historical minimum is rejected.

    Example:
        >>> threshold = DeltaMonotonicThreshold(0.1)
        >>> threshold.set_maximum_value(1.0)
        >>> threshold.is_valid(0.95), threshold.is_valid(0.85)
        (True, False)
    """

    kind = ThresholdKind.DELTA_MONOTONIC

    def __init__(self, delta: float | None, test_group: str = "", test_name: str = "") -> None:
        super().__init__(test_group, test_name)
        self.delta = require_parameter(self.kind, "delta", delta)

    def check(self, value: float, state: ThresholdState) -> bool:
        if state.maximum_value is None and state.minimum_value is None:
            return True

        if guards_decrease(self.delta):
            return not (state.minimum_value is not None and value + self.delta > state.minimum_value)
        return not (state.maximum_value is not None and value + self.delta < state.maximum_value)

    def describe(self) -> str:
        trend = "decreasing" if guards_decrease(self.delta) else "increasing"
        return f"monotonic({trend}, delta {self.delta:+g})"
