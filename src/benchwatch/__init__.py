"""benchwatch: benchmark regression thresholds over build history."""

from __future__ import annotations

from benchwatch.core.exceptions import BenchwatchError, ConfigurationError
from benchwatch.history import MetricHistory, Observation
from benchwatch.pipeline import BuildVerdict, MetricTracker, ThresholdVerdict
from benchwatch.thresholds import (
    Threshold,
    ThresholdConfig,
    ThresholdKind,
    ThresholdState,
    ThresholdSuite,
    new_threshold,
)

__version__ = "1.0.0"
__all__ = [
    # Errors
    "BenchwatchError",
    "ConfigurationError",
    # History
    "MetricHistory",
    "Observation",
    # Pipeline
    "BuildVerdict",
    "MetricTracker",
    "ThresholdVerdict",
    # Thresholds
    "Threshold",
    "ThresholdConfig",
    "ThresholdKind",
    "ThresholdState",
    "ThresholdSuite",
    "new_threshold",
    # Version
    "__version__",
]
