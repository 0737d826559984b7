"""Unit tests for the ingestion pipeline."""

from __future__ import annotations

import pytest

from benchwatch.pipeline import BuildVerdict, MetricTracker, ThresholdVerdict
from benchwatch.thresholds import ThresholdSuite, new_threshold


class TestMetricTracker:
    """Tests for MetricTracker."""

    def test_first_build_always_passes(self) -> None:
        """A new series establishes a baseline."""
        tracker = MetricTracker("perf", "latency", [new_threshold("delta", delta=0.1)])

        verdict = tracker.ingest(0, 1000.0)

        assert verdict.passed is True
        assert verdict.verdicts[0].seeded is False

    def test_compares_against_prior_baseline(self) -> None:
        """Each value is compared with the previous build, not itself."""
        tracker = MetricTracker(thresholds=[new_threshold("delta", delta=0.5)])

        results = [tracker.ingest(build, value).passed for build, value in enumerate([1.0, 1.4, 2.0, 2.2])]

        assert results == [True, True, False, True]

    def test_failed_build_not_used_as_baseline(self) -> None:
        """Failed builds are evaluated but do not advance the baseline."""
        tracker = MetricTracker(thresholds=[new_threshold("delta", delta=0.5)])
        tracker.ingest(0, 1.0)

        spike = tracker.ingest(1, 9.0, failed=True)
        after = tracker.ingest(2, 1.2)

        assert spike.passed is False
        assert spike.failed is True
        assert after.passed is True

    def test_monotonic_increasing_series(self) -> None:
        """Monotonic threshold follows the reported maximum."""
        tracker = MetricTracker(thresholds=[new_threshold("deltamonotonic", delta=0.1)])

        verdicts = tracker.ingest_series([1.0, 1.05, 1.1, 0.9, 1.2])

        assert [v.passed for v in verdicts] == [True, True, True, False, True]

    def test_reports_extrema(self) -> None:
        """Verdicts carry the history aggregates after ingestion."""
        tracker = MetricTracker()

        verdicts = tracker.ingest_series([0.1, 0.2, 0.3, 0.4])
        last = verdicts[-1]

        assert last.maximum == 0.3
        assert last.minimum == 0.1
        assert last.average == pytest.approx(0.25)

    def test_average_threshold(self) -> None:
        """Average thresholds see the running average of earlier builds."""
        tracker = MetricTracker(thresholds=[new_threshold("percentageaverage", percentage=-10)])

        verdicts = tracker.ingest_series([100.0, 100.0, 100.0, 85.0])

        assert [v.passed for v in verdicts] == [True, True, True, False]

    def test_ingest_series_failed_builds(self) -> None:
        """Positions listed as failed are recorded as failed."""
        tracker = MetricTracker()

        tracker.ingest_series([1.0, 50.0, 2.0], failed_builds=[1])

        assert tracker.history.is_failed_build(1) is True
        assert tracker.history.maximum() == 1.0

    def test_multiple_thresholds(self) -> None:
        """Every threshold reports its own verdict."""
        tracker = MetricTracker(
            thresholds=[
                new_threshold("absolute", maximum=10.0),
                new_threshold("delta", delta=1.0),
            ]
        )
        tracker.ingest(0, 5.0)

        verdict = tracker.ingest(1, 11.0)

        assert [v.passed for v in verdict.verdicts] == [False, False]
        assert len(verdict.failed_thresholds) == 2

    def test_absolute_first_build_passes(self) -> None:
        """Absolute bounds do not reject the first build of a series."""
        tracker = MetricTracker(thresholds=[new_threshold("absolute", maximum=10.0)])

        assert tracker.ingest(0, 12.0).passed is True
        assert tracker.ingest(1, 12.0).passed is False

    def test_add_threshold(self) -> None:
        """Thresholds added later start unseeded."""
        tracker = MetricTracker()
        tracker.ingest(0, 1.0)
        tracker.add_threshold(new_threshold("delta", delta=0.1))

        assert tracker.ingest(1, 5.0).passed is True
        assert tracker.ingest(2, 6.0).passed is False

    def test_from_suite(self) -> None:
        """Tracker picks up thresholds targeting its metric."""
        suite = ThresholdSuite.from_entries(
            [
                {"method": "delta", "test_name": "latency", "delta": 1.0},
                {"method": "delta", "test_name": "memory", "delta": 1.0},
            ]
        )

        tracker = MetricTracker.from_suite(suite, "perf", "latency")

        assert len(tracker.thresholds) == 1
        assert tracker.key == "perf/latency"

    def test_integer_values(self) -> None:
        """Integer measurements are accepted."""
        tracker = MetricTracker(thresholds=[new_threshold("delta", delta=2)])
        tracker.ingest(0, 10)

        verdict = tracker.ingest(1, 13)

        assert verdict.value == 13.0
        assert verdict.passed is False


class TestBuildVerdict:
    """Tests for BuildVerdict."""

    def test_no_thresholds_passes(self) -> None:
        """A build with no thresholds passes."""
        assert BuildVerdict(build=1, value=1.0, failed=False).passed is True

    def test_to_dict(self) -> None:
        """to_dict() includes every threshold verdict."""
        verdict = BuildVerdict(
            build=3,
            value=2.0,
            failed=False,
            verdicts=[ThresholdVerdict(threshold="delta(+1 from previous)", kind="delta", passed=False, seeded=True)],
            maximum=2.0,
            minimum=1.0,
            average=1.5,
        )

        data = verdict.to_dict()

        assert data["build"] == 3
        assert data["passed"] is False
        assert data["thresholds"] == [
            {"threshold": "delta(+1 from previous)", "kind": "delta", "passed": False, "seeded": True}
        ]
