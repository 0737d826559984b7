"""Example: gate nightly benchmark builds with several thresholds.

Run with: python examples/nightly_regression_gate.py
"""

from __future__ import annotations

from benchwatch import MetricTracker, ThresholdSuite
from benchwatch.core import configure_logging

# Build number -> (throughput in req/s, run marked failed)
NIGHTLY_BUILDS: dict[int, tuple[float, bool]] = {
    101: (1180.0, False),
    102: (1205.0, False),
    103: (640.0, True),  # runner lost its network mid-benchmark
    104: (1212.0, False),
    105: (1090.0, False),
    106: (1230.0, False),
}


def main() -> None:
    configure_logging("INFO")

    suite = ThresholdSuite.from_entries(
        [
            {"method": "absolute", "test_name": "throughput", "minimum": 1000},
            {"method": "percentage", "test_name": "throughput", "percentage": -5},
            {"method": "deltamonotonic", "test_name": "throughput", "delta": 50},
        ]
    )
    tracker = MetricTracker.from_suite(suite, "http", "throughput")

    for build, (value, failed) in NIGHTLY_BUILDS.items():
        verdict = tracker.ingest(build, value, failed)
        status = "skipped" if failed else ("ok" if verdict.passed else "REGRESSION")
        print(f"build {build}: {value:7.1f}  {status}")
        for item in verdict.failed_thresholds:
            print(f"    - {item.threshold}")

    print()
    print(f"reported maximum: {tracker.history.maximum()}")
    print(f"reported minimum: {tracker.history.minimum()}")


if __name__ == "__main__":
    main()
