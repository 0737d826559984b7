"""Metric history module for benchwatch.

This module stores per-build observations of a metric and answers
extremum and average queries over them.

Example:
    >>> from benchwatch.history import MetricHistory
    >>>
    >>> history = MetricHistory("throughput")
    >>> history.record(1, 120.0)
    >>> history.record(2, 95.0, failed=True)
    >>> history.maximum()
    120.0
"""

from __future__ import annotations

from benchwatch.history.metric import MetricHistory
from benchwatch.history.models import Observation

__all__ = [
    "MetricHistory",
    "Observation",
]
