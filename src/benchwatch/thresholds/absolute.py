"""Absolute bound threshold."""

from __future__ import annotations

from typing import TYPE_CHECKING

from benchwatch.core.exceptions import ConfigurationError
from benchwatch.thresholds.base import Threshold, optional_parameter
from benchwatch.thresholds.models import ThresholdKind

if TYPE_CHECKING:
    from benchwatch.thresholds.models import ThresholdState


class AbsoluteThreshold(Threshold):
    """Require values to lie within fixed bounds.

    A bound left as None does not constrain. Like every threshold, it
    accepts any value until the first build has seeded it.

    Example:
        >>> threshold = AbsoluteThreshold(minimum=0.0, maximum=1.0)
        >>> threshold.set_previous_value(0.5)
        >>> threshold.is_valid(1.0)
        True
        >>> threshold.is_valid(1.5)
        False
    """

    kind = ThresholdKind.ABSOLUTE

    def __init__(
        self,
        minimum: float | None = None,
        maximum: float | None = None,
        test_group: str = "",
        test_name: str = "",
    ) -> None:
        """Initialize and validate bounds.

        Raises:
            ConfigurationError: If both bounds are missing or minimum > maximum.
        """
        super().__init__(test_group, test_name)
        self.minimum = optional_parameter(self.kind, "minimum", minimum)
        self.maximum = optional_parameter(self.kind, "maximum", maximum)

        if self.minimum is None and self.maximum is None:
            msg = f"{self.kind.display_name} requires a minimum or a maximum value"
            raise ConfigurationError(msg)
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            msg = f"{self.kind.display_name}: minimum {self.minimum} is above maximum {self.maximum}"
            raise ConfigurationError(msg)

    def check(self, value: float, state: ThresholdState) -> bool:  # noqa: ARG002
        if self.minimum is not None and value < self.minimum:
            return False
        return not (self.maximum is not None and value > self.maximum)

    def describe(self) -> str:
        low = "-inf" if self.minimum is None else f"{self.minimum:g}"
        high = "+inf" if self.maximum is None else f"{self.maximum:g}"
        return f"absolute[{low}, {high}]"
