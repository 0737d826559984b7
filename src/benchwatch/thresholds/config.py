"""Threshold configuration files.

This module provides pydantic models describing thresholds, loadable
from YAML, and the glue that turns them into evaluators.

Example YAML:

    thresholds:
      - method: deltamonotonic
        delta: 0.1
      - method: absolute
        test_group: retrieval
        test_name: recall
        minimum: 0.7
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from benchwatch.core.exceptions import ConfigurationError
from benchwatch.thresholds.factory import new_threshold
from benchwatch.thresholds.models import ThresholdKind

if TYPE_CHECKING:
    from benchwatch.thresholds.base import Threshold

logger = logging.getLogger(__name__)


class ThresholdConfig(BaseModel):
    """Declarative description of one threshold.

    Attributes:
        method: Threshold kind.
        test_group: Metric group the threshold applies to ("" = any).
        test_name: Metric name the threshold applies to ("" = any).
        minimum: Lower bound for absolute thresholds.
        maximum: Upper bound for absolute thresholds.
        percentage: Signed percentage margin.
        delta: Signed delta margin.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    method: ThresholdKind = Field(
        ...,
        validation_alias=AliasChoices("method", "kind", "type"),
        description="Threshold kind",
    )
    test_group: str = Field(
        default="",
        validation_alias=AliasChoices("test_group", "testGroup", "group"),
        description="Metric group ('' matches any)",
    )
    test_name: str = Field(
        default="",
        validation_alias=AliasChoices("test_name", "testName", "name"),
        description="Metric name ('' matches any)",
    )
    minimum: float | None = Field(default=None, description="Lower bound")
    maximum: float | None = Field(default=None, description="Upper bound")
    percentage: float | None = Field(default=None, description="Signed percentage margin")
    delta: float | None = Field(default=None, description="Signed delta margin")

    @field_validator("method", mode="before")
    @classmethod
    def _resolve_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            resolved = ThresholdKind.resolve(value)
            if resolved is None:
                msg = f"Unknown threshold method: {value!r}"
                raise ValueError(msg)
            return resolved
        return value

    def build(self) -> Threshold:
        """Create a fresh evaluator for this configuration.

        Raises:
            ConfigurationError: If a parameter required by the method is missing.
        """
        return new_threshold(
            self.method,
            test_group=self.test_group,
            test_name=self.test_name,
            minimum=self.minimum,
            maximum=self.maximum,
            percentage=self.percentage,
            delta=self.delta,
        )

    def applies_to(self, test_group: str, test_name: str) -> bool:
        """Check whether this configuration targets a metric."""
        return (not self.test_group or self.test_group == test_group) and (
            not self.test_name or self.test_name == test_name
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary, omitting unset values."""
        data: dict[str, Any] = {"method": self.method.value}
        if self.test_group:
            data["test_group"] = self.test_group
        if self.test_name:
            data["test_name"] = self.test_name
        for key in ("minimum", "maximum", "percentage", "delta"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


class ThresholdSuite(BaseModel):
    """A set of threshold configurations.

    Example:
        >>> suite = ThresholdSuite.from_yaml("thresholds.yaml")
        >>> evaluators = suite.build_for("retrieval", "recall")
    """

    model_config = {"frozen": True}

    thresholds: list[ThresholdConfig] = Field(default_factory=list, description="Threshold configurations")

    @classmethod
    def from_entries(cls, entries: list[dict[str, Any]]) -> ThresholdSuite:
        """Validate raw threshold entries.

        Every entry is checked eagerly, so a missing delta or percentage is
        reported when the suite is loaded.

        Args:
            entries: Raw threshold dictionaries.

        Returns:
            The validated suite.

        Raises:
            ConfigurationError: If an entry is malformed; the message names
                the entry index.
        """
        configs: list[ThresholdConfig] = []
        for index, entry in enumerate(entries):
            try:
                config = ThresholdConfig.model_validate(entry)
                config.build()
            except ValidationError as e:
                msg = f"Invalid threshold #{index}: {e}"
                raise ConfigurationError(msg) from e
            except ConfigurationError as e:
                msg = f"Invalid threshold #{index}: {e}"
                raise ConfigurationError(msg) from e
            configs.append(config)
        return cls(thresholds=configs)

    @classmethod
    def from_yaml(cls, path: Path | str) -> ThresholdSuite:
        """Load thresholds from a YAML file.

        The list may sit under a top-level ``thresholds`` key or be the
        document itself.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ConfigurationError: If the content is not a threshold list.
        """
        import yaml

        path = Path(path)
        if not path.exists():
            msg = f"Threshold file not found: {path}"
            raise FileNotFoundError(msg)

        try:
            data = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise ConfigurationError(msg) from e

        if data is None:
            return cls()
        if isinstance(data, dict):
            if "thresholds" not in data:
                msg = f"Missing 'thresholds' key in {path}"
                raise ConfigurationError(msg)
            entries = data["thresholds"] or []
        else:
            entries = data
        if not isinstance(entries, list):
            msg = f"Expected a list of thresholds in {path}"
            raise ConfigurationError(msg)

        suite = cls.from_entries(entries)
        logger.debug(f"Loaded {len(suite.thresholds)} thresholds from {path}")
        return suite

    def to_yaml(self, path: Path | str) -> None:
        """Save thresholds to a YAML file."""
        import yaml

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {"thresholds": [config.to_dict() for config in self.thresholds]}
        path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    def build_for(self, test_group: str, test_name: str) -> list[Threshold]:
        """Create fresh evaluators for every threshold targeting a metric."""
        return [config.build() for config in self.thresholds if config.applies_to(test_group, test_name)]
