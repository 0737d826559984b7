"""Reference ingestion pipeline for a single metric.

This module composes MetricHistory and the threshold evaluators in the
order they require: every threshold sees the new value against the
baselines of earlier builds, and only then are the baselines advanced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from benchwatch.history import MetricHistory

if TYPE_CHECKING:
    from collections.abc import Iterable

    from benchwatch.thresholds import Threshold, ThresholdSuite

logger = logging.getLogger(__name__)


@dataclass
class ThresholdVerdict:
    """Outcome of one threshold for one build.

    Attributes:
        threshold: Description of the threshold.
        kind: Threshold kind identifier.
        passed: Whether the value satisfied the threshold.
        seeded: Whether the threshold had a baseline to compare against.
    """

    threshold: str
    kind: str
    passed: bool
    seeded: bool


@dataclass
class BuildVerdict:
    """Outcome of ingesting one build of a metric.

    Attributes:
        build: Build number.
        value: Ingested value.
        failed: Whether the build's run was marked failed.
        verdicts: One entry per configured threshold.
        maximum: Reported maximum after ingestion.
        minimum: Reported minimum after ingestion.
        average: Average after ingestion.
    """

    build: int
    value: float
    failed: bool
    verdicts: list[ThresholdVerdict] = field(default_factory=list)
    maximum: float | None = None
    minimum: float | None = None
    average: float | None = None

    @property
    def passed(self) -> bool:
        """True if every threshold accepted the value."""
        return all(v.passed for v in self.verdicts)

    @property
    def failed_thresholds(self) -> list[ThresholdVerdict]:
        return [v for v in self.verdicts if not v.passed]

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON output."""
        return {
            "build": self.build,
            "value": self.value,
            "failed": self.failed,
            "passed": self.passed,
            "maximum": self.maximum,
            "minimum": self.minimum,
            "average": self.average,
            "thresholds": [
                {"threshold": v.threshold, "kind": v.kind, "passed": v.passed, "seeded": v.seeded}
                for v in self.verdicts
            ],
        }


class MetricTracker:
    """History and thresholds for one metric, fed build by build.

    Not thread-safe: a tracker must be driven by a single caller, one
    ingest() at a time. Builds may arrive in any order.

    Attributes:
        test_group: Group of the tracked metric.
        test_name: Name of the tracked metric.
        history: Observations recorded so far.
        thresholds: Evaluators applied to every build.

    Example:
        >>> from benchwatch.thresholds import new_threshold
        >>> tracker = MetricTracker("perf", "latency", [new_threshold("delta", delta=5.0)])
        >>> tracker.ingest(1, 100.0).passed
        True
        >>> tracker.ingest(2, 110.0).passed
        False
    """

    def __init__(
        self,
        test_group: str = "",
        test_name: str = "",
        thresholds: Iterable[Threshold] | None = None,
    ) -> None:
        self.test_group = test_group
        self.test_name = test_name
        self.history = MetricHistory(self.key)
        self.thresholds: list[Threshold] = list(thresholds or [])

    @classmethod
    def from_suite(cls, suite: ThresholdSuite, test_group: str = "", test_name: str = "") -> MetricTracker:
        """Create a tracker with fresh evaluators for every matching threshold."""
        return cls(test_group, test_name, suite.build_for(test_group, test_name))

    @property
    def key(self) -> str:
        return f"{self.test_group}/{self.test_name}" if self.test_group else self.test_name

    def add_threshold(self, threshold: Threshold) -> None:
        """Attach a threshold; it starts unseeded."""
        self.thresholds.append(threshold)

    def ingest(self, build: int, value: float, failed: bool = False) -> BuildVerdict:
        """Evaluate and record one build.

        Args:
            build: Build number.
            value: Measured value.
            failed: Whether the build's run was marked failed. Failed
                builds are evaluated but never become a baseline.

        Returns:
            The verdicts of every threshold and the updated extrema.
        """
        number = float(value)
        verdicts = [
            ThresholdVerdict(
                threshold=threshold.describe(),
                kind=threshold.kind.value,
                passed=threshold.is_valid(number),
                seeded=threshold.seeded,
            )
            for threshold in self.thresholds
        ]

        self.history.record(build, number, failed)
        maximum = self.history.maximum()
        minimum = self.history.minimum()
        average = self.history.average()

        if not failed:
            for threshold in self.thresholds:
                threshold.advance(previous=number, average=average, maximum=maximum, minimum=minimum)

        verdict = BuildVerdict(
            build=build,
            value=number,
            failed=failed,
            verdicts=verdicts,
            maximum=maximum,
            minimum=minimum,
            average=average,
        )
        if not verdict.passed:
            names = ", ".join(v.threshold for v in verdict.failed_thresholds)
            logger.info(f"Build {build} of '{self.key}' failed thresholds: {names}")
        return verdict

    def ingest_series(self, values: Iterable[float], failed_builds: Iterable[int] = ()) -> list[BuildVerdict]:
        """Ingest values whose build numbers are their positions.

        Args:
            values: Values in build order, starting at build 0.
            failed_builds: Build numbers to mark failed.

        Returns:
            One verdict per value.
        """
        failed = set(failed_builds)
        return [self.ingest(build, value, build in failed) for build, value in enumerate(values)]
