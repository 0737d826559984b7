"""Per-metric build history with extremum queries.

This module provides MetricHistory, the append-only store of observations
for one metric. Its maximum() and minimum() follow a runner-up rule: when
the most extreme value sits on the newest build, the previous extreme is
reported instead, so a single outlier on the latest build never becomes the
headline value while earlier data exists.

MetricHistory performs no locking. Callers must not mutate or query the
same instance from more than one thread at a time.
"""

from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING

from benchwatch.history.models import Observation

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)


class MetricHistory:
    """Build-keyed history of observations for a single metric.

    At most one observation is kept per build number; recording the same
    build again replaces the earlier observation. Observations for failed
    builds are kept but excluded from every aggregate.

    Attributes:
        name: Optional metric name, used in log messages.

    Example:
        >>> history = MetricHistory("latency")
        >>> for build, value in enumerate([0.1, 0.2, 0.3, 0.4]):
        ...     history.record(build, value)
        >>> history.maximum()
        0.3
        >>> history.minimum()
        0.1
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._observations: dict[int, Observation] = {}

    def __len__(self) -> int:
        return len(self._observations)

    def __contains__(self, build: object) -> bool:
        return build in self._observations

    def __iter__(self) -> Iterator[Observation]:
        """Iterate observations in ascending build order."""
        for build in sorted(self._observations):
            yield self._observations[build]

    def __repr__(self) -> str:
        return f"MetricHistory(name={self.name!r}, observations={len(self)})"

    def record(self, build: int, value: float, failed: bool = False) -> None:
        """Insert or overwrite the observation for a build.

        Args:
            build: Build number.
            value: Measured value (integers are converted to float).
            failed: Whether the build's run was marked failed.
        """
        if build in self._observations:
            logger.debug(f"Overwriting observation for build {build} of metric '{self.name}'")
        self._observations[build] = Observation(build=build, value=float(value), failed=failed)

    def mark_failed(self, build: int, failed: bool = True) -> None:
        """Change the failed state of an already recorded build.

        Args:
            build: Build number.
            failed: New failed state.

        Raises:
            KeyError: If no observation exists for the build.
        """
        observation = self._observations[build]
        self._observations[build] = observation.model_copy(update={"failed": failed})

    def is_failed_build(self, build: int) -> bool:
        """Check whether a build is marked failed.

        Unknown builds are reported as not failed.
        """
        observation = self._observations.get(build)
        return observation is not None and observation.failed

    def get(self, build: int) -> Observation | None:
        """Get the observation recorded for a build, if any."""
        return self._observations.get(build)

    def builds(self) -> list[int]:
        """Get all recorded build numbers in ascending order."""
        return sorted(self._observations)

    def _valid(self) -> list[Observation]:
        return [obs for obs in self if not obs.failed]

    def latest(self) -> Observation | None:
        """Get the non-failed observation with the greatest build number.

        Returns:
            The latest usable observation, or None if there is none.
        """
        valid = self._valid()
        return valid[-1] if valid else None

    def average(self) -> float | None:
        """Get the mean value over non-failed observations.

        Returns:
            The average, or None if there are no usable observations.
        """
        values = [obs.value for obs in self._valid()]
        if not values:
            return None
        return sum(values) / len(values)

    def maximum(self) -> float | None:
        """Get the reported maximum value.

        Returns the greatest non-failed value, unless that value belongs to
        the latest non-failed build and an earlier best exists, in which
        case the earlier best is returned.

        Returns:
            The reported maximum, or None if there are no usable observations.
        """
        return self._extremum(operator.gt)

    def minimum(self) -> float | None:
        """Get the reported minimum value.

        Mirror of maximum(): the least non-failed value, unless it belongs
        to the latest non-failed build and an earlier best exists.

        Returns:
            The reported minimum, or None if there are no usable observations.
        """
        return self._extremum(operator.lt)

    def _extremum(self, beats: Callable[[float, float], bool]) -> float | None:
        """Scan once, tracking the best observation and its runner-up.

        The runner-up starts as the first usable observation and is only
        replaced by the outgoing best when a new best is promoted and the
        outgoing best beats it.
        """
        latest_build: int | None = None
        best: Observation | None = None
        runner_up: Observation | None = None

        for obs in self:
            if obs.failed:
                continue
            if latest_build is None or obs.build > latest_build:
                latest_build = obs.build

            if best is None or beats(obs.value, best.value):
                if runner_up is None:
                    runner_up = obs
                elif best is not None and beats(best.value, runner_up.value):
                    runner_up = best
                best = obs

        if best is None:
            return None
        if runner_up is not None and runner_up is not best and best.build == latest_build:
            return runner_up.value
        return best.value
