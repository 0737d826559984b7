"""Models for metric history.

This module provides the Observation value object recorded for every
build of a tracked metric.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Observation(BaseModel):
    """One measurement of a metric for a single build.

    Attributes:
        build: Build number the measurement belongs to.
        value: Measured value, stored as a float.
        failed: Whether the build's run was marked failed.

    Example:
        >>> obs = Observation(build=12, value=0.84)
        >>> obs.failed
        False
    """

    model_config = {"frozen": True}

    build: int = Field(..., description="Build number")
    value: float = Field(..., description="Measured value")
    failed: bool = Field(default=False, description="Whether the build was marked failed")
