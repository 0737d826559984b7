"""Threshold construction by kind."""

from __future__ import annotations

from typing import TYPE_CHECKING

from benchwatch.core.exceptions import ConfigurationError
from benchwatch.thresholds.absolute import AbsoluteThreshold
from benchwatch.thresholds.models import ThresholdKind
from benchwatch.thresholds.monotonic import DeltaMonotonicThreshold
from benchwatch.thresholds.relative import (
    DeltaAverageThreshold,
    DeltaThreshold,
    PercentageAverageThreshold,
    PercentageThreshold,
)

if TYPE_CHECKING:
    from benchwatch.thresholds.base import Threshold


def new_threshold(
    kind: ThresholdKind | str,
    test_group: str = "",
    test_name: str = "",
    minimum: float | None = None,
    maximum: float | None = None,
    percentage: float | None = None,
    delta: float | None = None,
) -> Threshold:
    """Create an unseeded threshold of the given kind.

    Parameters that the kind does not use are ignored.

    Args:
        kind: Threshold kind or its identifier (e.g. "deltamonotonic").
        test_group: Group of the metric the threshold applies to.
        test_name: Name of the metric the threshold applies to.
        minimum: Lower bound (absolute).
        maximum: Upper bound (absolute).
        percentage: Signed percentage margin (percentage kinds).
        delta: Signed delta margin (delta kinds).

    Returns:
        A new threshold evaluator.

    Raises:
        ConfigurationError: If the kind is unknown or a required
            parameter is missing.

    Example:
        >>> threshold = new_threshold("delta", delta=0.1)
        >>> threshold.kind
        <ThresholdKind.DELTA: 'delta'>
    """
    resolved = kind if isinstance(kind, ThresholdKind) else ThresholdKind.resolve(kind)
    if resolved is None:
        valid = ", ".join(k.value for k in ThresholdKind)
        msg = f"Unknown threshold kind: {kind!r} (expected one of: {valid})"
        raise ConfigurationError(msg)

    if resolved is ThresholdKind.ABSOLUTE:
        return AbsoluteThreshold(minimum, maximum, test_group, test_name)
    if resolved is ThresholdKind.PERCENTAGE:
        return PercentageThreshold(percentage, test_group, test_name)
    if resolved is ThresholdKind.PERCENTAGE_AVERAGE:
        return PercentageAverageThreshold(percentage, test_group, test_name)
    if resolved is ThresholdKind.DELTA:
        return DeltaThreshold(delta, test_group, test_name)
    if resolved is ThresholdKind.DELTA_AVERAGE:
        return DeltaAverageThreshold(delta, test_group, test_name)
    return DeltaMonotonicThreshold(delta, test_group, test_name)
