"""Tests for threshold configuration files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

if TYPE_CHECKING:
    from pathlib import Path

from benchwatch.core.exceptions import ConfigurationError
from benchwatch.thresholds import (
    DeltaMonotonicThreshold,
    ThresholdConfig,
    ThresholdKind,
    ThresholdSuite,
)


class TestThresholdConfig:
    """Tests for ThresholdConfig model."""

    def test_method_identifier(self) -> None:
        """Method accepts configuration identifiers."""
        config = ThresholdConfig.model_validate({"method": "deltamonotonic", "delta": 0.1})

        assert config.method is ThresholdKind.DELTA_MONOTONIC
        assert config.delta == 0.1

    def test_camel_case_aliases(self) -> None:
        """camelCase keys are accepted."""
        config = ThresholdConfig.model_validate(
            {"method": "percentageAverage", "testGroup": "perf", "testName": "latency", "percentage": 5}
        )

        assert config.method is ThresholdKind.PERCENTAGE_AVERAGE
        assert config.test_group == "perf"
        assert config.test_name == "latency"

    def test_unknown_method(self) -> None:
        """Unknown method fails validation."""
        with pytest.raises(ValidationError, match="Unknown threshold method"):
            ThresholdConfig.model_validate({"method": "ratio"})

    def test_build(self) -> None:
        """build() returns a fresh unseeded evaluator."""
        config = ThresholdConfig(method=ThresholdKind.DELTA_MONOTONIC, delta=-0.2, test_name="loss")

        first = config.build()
        second = config.build()

        assert isinstance(first, DeltaMonotonicThreshold)
        assert first is not second
        assert first.test_name == "loss"
        assert first.seeded is False

    def test_build_missing_parameter(self) -> None:
        """Missing required parameter surfaces at build time."""
        config = ThresholdConfig(method=ThresholdKind.DELTA)

        with pytest.raises(ConfigurationError):
            config.build()

    def test_applies_to(self) -> None:
        """Empty group or name matches any metric."""
        config = ThresholdConfig(method=ThresholdKind.DELTA, delta=1.0, test_group="perf")

        assert config.applies_to("perf", "latency") is True
        assert config.applies_to("quality", "latency") is False

    def test_to_dict_omits_unset(self) -> None:
        """to_dict() only includes set values."""
        config = ThresholdConfig(method=ThresholdKind.ABSOLUTE, maximum=2.0)

        assert config.to_dict() == {"method": "absolute", "maximum": 2.0}


class TestThresholdSuiteYaml:
    """Tests for ThresholdSuite YAML loading."""

    def test_from_yaml(self, tmp_path: Path) -> None:
        """Loads thresholds under a top-level key."""
        yaml_content = """
thresholds:
  - method: deltamonotonic
    delta: 0.1
  - method: absolute
    test_group: retrieval
    test_name: recall
    minimum: 0.7
"""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text(yaml_content)

        suite = ThresholdSuite.from_yaml(config_file)

        assert len(suite.thresholds) == 2
        assert suite.thresholds[0].method is ThresholdKind.DELTA_MONOTONIC
        assert suite.thresholds[1].minimum == 0.7

    def test_from_yaml_bare_list(self, tmp_path: Path) -> None:
        """Loads a document that is just a list."""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text("- method: delta\n  delta: 0.5\n")

        suite = ThresholdSuite.from_yaml(config_file)

        assert suite.thresholds[0].delta == 0.5

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        """Empty file yields an empty suite."""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text("")

        assert ThresholdSuite.from_yaml(config_file).thresholds == []

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ThresholdSuite.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_missing_delta_names_entry(self, tmp_path: Path) -> None:
        """Entry missing a required parameter is reported by index."""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text("thresholds:\n  - method: delta\n    delta: 1\n  - method: deltamonotonic\n")

        with pytest.raises(ConfigurationError, match="#1"):
            ThresholdSuite.from_yaml(config_file)

    def test_from_yaml_unknown_method(self, tmp_path: Path) -> None:
        """Unknown method is a configuration error."""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text("thresholds:\n  - method: ratio\n")

        with pytest.raises(ConfigurationError, match="#0"):
            ThresholdSuite.from_yaml(config_file)

    def test_from_yaml_not_a_list(self, tmp_path: Path) -> None:
        """A mapping instead of a list is rejected."""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text("thresholds:\n  method: delta\n")

        with pytest.raises(ConfigurationError, match="list of thresholds"):
            ThresholdSuite.from_yaml(config_file)

    def test_from_yaml_misspelled_key(self, tmp_path: Path) -> None:
        """A mapping without a thresholds key is rejected rather than loaded empty."""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text("threshold:\n  - method: delta\n    delta: 0.5\n")

        with pytest.raises(ConfigurationError, match="Missing 'thresholds' key"):
            ThresholdSuite.from_yaml(config_file)

    def test_from_yaml_empty_thresholds_key(self, tmp_path: Path) -> None:
        """An explicitly empty thresholds key yields an empty suite."""
        config_file = tmp_path / "thresholds.yaml"
        config_file.write_text("thresholds:\n")

        assert ThresholdSuite.from_yaml(config_file).thresholds == []

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved suite loads back unchanged."""
        suite = ThresholdSuite(
            thresholds=[
                ThresholdConfig(method=ThresholdKind.PERCENTAGE, percentage=-5.0, test_name="recall"),
                ThresholdConfig(method=ThresholdKind.ABSOLUTE, minimum=0.0, maximum=1.0),
            ]
        )
        config_file = tmp_path / "nested" / "thresholds.yaml"

        suite.to_yaml(config_file)

        assert ThresholdSuite.from_yaml(config_file) == suite

    def test_build_for(self) -> None:
        """build_for() returns evaluators matching the metric."""
        suite = ThresholdSuite.from_entries(
            [
                {"method": "delta", "delta": 1.0},
                {"method": "absolute", "test_group": "perf", "maximum": 10},
                {"method": "percentage", "test_group": "quality", "percentage": -5},
            ]
        )

        kinds = [t.kind for t in suite.build_for("perf", "latency")]

        assert kinds == [ThresholdKind.DELTA, ThresholdKind.ABSOLUTE]
