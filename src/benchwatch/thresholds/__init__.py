"""Threshold evaluation module for benchwatch.

This module provides the threshold evaluators that classify a new
benchmark value as pass or fail against historical baselines.

Example:
    >>> from benchwatch.thresholds import ThresholdKind, new_threshold
    >>>
    >>> threshold = new_threshold(ThresholdKind.DELTA_MONOTONIC, delta=-0.1)
    >>> threshold.is_valid(1.2)  # unseeded: nothing to regress against
    True
    >>> threshold.set_minimum_value(1.0)
    >>> threshold.is_valid(1.2)
    False
"""

from __future__ import annotations

from benchwatch.thresholds.absolute import AbsoluteThreshold
from benchwatch.thresholds.base import Threshold
from benchwatch.thresholds.config import ThresholdConfig, ThresholdSuite
from benchwatch.thresholds.factory import new_threshold
from benchwatch.thresholds.models import ThresholdKind, ThresholdState
from benchwatch.thresholds.monotonic import DeltaMonotonicThreshold
from benchwatch.thresholds.relative import (
    DeltaAverageThreshold,
    DeltaThreshold,
    PercentageAverageThreshold,
    PercentageThreshold,
    RelativeThreshold,
)

__all__ = [
    "AbsoluteThreshold",
    "DeltaAverageThreshold",
    "DeltaMonotonicThreshold",
    "DeltaThreshold",
    "PercentageAverageThreshold",
    "PercentageThreshold",
    "RelativeThreshold",
    "Threshold",
    "ThresholdConfig",
    "ThresholdKind",
    "ThresholdState",
    "ThresholdSuite",
    "new_threshold",
]
