"""Main CLI entry point for benchwatch.

This module defines the Typer application and all CLI commands.
"""

from __future__ import annotations

import json
from typing import Annotated

import typer

from benchwatch import __version__
from benchwatch.core.config import configure_logging, load_settings
from benchwatch.core.exceptions import ConfigurationError
from benchwatch.history import MetricHistory
from benchwatch.pipeline import MetricTracker
from benchwatch.thresholds import Threshold, ThresholdSuite, new_threshold

app = typer.Typer(
    name="benchwatch",
    help="benchwatch: benchmark regression thresholds over build history.",
    add_completion=False,
    no_args_is_help=True,
)

# Global state for options
state: dict[str, bool] = {
    "json": False,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"benchwatch v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results in JSON format.",
        ),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level (overrides BENCHWATCH_LOG_LEVEL).",
        ),
    ] = None,
) -> None:
    """benchwatch: benchmark regression thresholds over build history."""
    state["json"] = json_output
    try:
        configure_logging(log_level)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e


@app.command()
def version() -> None:
    """Show the current version."""
    typer.echo(f"benchwatch v{__version__}")


def _format(value: float | None) -> str:
    return "-" if value is None else f"{value:g}"


def _load_thresholds(
    method: str | None,
    minimum: float | None,
    maximum: float | None,
    percentage: float | None,
    delta: float | None,
    thresholds_file: str | None,
    group: str,
    name: str,
) -> list[Threshold]:
    thresholds: list[Threshold] = []
    try:
        if thresholds_file is None and method is None:
            thresholds_file = load_settings().thresholds_file or None
        if method is not None:
            thresholds.append(
                new_threshold(
                    method,
                    test_group=group,
                    test_name=name,
                    minimum=minimum,
                    maximum=maximum,
                    percentage=percentage,
                    delta=delta,
                )
            )
        if thresholds_file is not None:
            thresholds.extend(ThresholdSuite.from_yaml(thresholds_file).build_for(group, name))
    except (ConfigurationError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e

    return thresholds


@app.command()
def check(
    values: Annotated[
        list[float],
        typer.Option(
            "--value",
            "-x",
            help="Value of the next build (repeat in build order, starting at build 0).",
        ),
    ],
    method: Annotated[
        str | None,
        typer.Option(
            "--method",
            "-m",
            help="Threshold kind: absolute, percentage, percentageaverage, delta, deltaaverage, deltamonotonic.",
        ),
    ] = None,
    minimum: Annotated[float | None, typer.Option("--min", help="Lower bound (absolute).")] = None,
    maximum: Annotated[float | None, typer.Option("--max", help="Upper bound (absolute).")] = None,
    percentage: Annotated[
        float | None,
        typer.Option("--percentage", "-p", help="Signed percentage margin."),
    ] = None,
    delta: Annotated[float | None, typer.Option("--delta", "-d", help="Signed delta margin.")] = None,
    failed: Annotated[
        list[int] | None,
        typer.Option("--failed", "-f", help="Build number whose run was marked failed (repeatable)."),
    ] = None,
    thresholds_file: Annotated[
        str | None,
        typer.Option("--thresholds", "-t", help="YAML file with threshold definitions."),
    ] = None,
    group: Annotated[str, typer.Option("--group", "-g", help="Metric group, for threshold files.")] = "",
    name: Annotated[str, typer.Option("--name", help="Metric name, for threshold files.")] = "",
) -> None:
    """Run a series of build values through thresholds.

    Exits with 1 if any non-failed build violates a threshold.

    Examples:
        benchwatch check -m delta -d 0.5 -x 1.0 -x 1.2 -x 2.0
        benchwatch check -m deltamonotonic -d 0.1 -x 1 -x 1.1 -x 0.9
        benchwatch check -t thresholds.yaml -g perf --name latency -x 10 -x 12
    """
    thresholds = _load_thresholds(method, minimum, maximum, percentage, delta, thresholds_file, group, name)
    if not thresholds:
        typer.echo("Error: Either --method or --thresholds is required.", err=True)
        raise typer.Exit(2)

    tracker = MetricTracker(group, name, thresholds)
    verdicts = tracker.ingest_series(values, failed or [])
    regressions = [v for v in verdicts if not v.failed and not v.passed]

    if state["json"]:
        typer.echo(
            json.dumps(
                {
                    "status": "fail" if regressions else "pass",
                    "builds": [v.to_dict() for v in verdicts],
                },
                indent=2,
            )
        )
    else:
        typer.echo()
        for verdict in verdicts:
            if verdict.failed:
                status = "SKIP"
            elif verdict.passed:
                status = "PASS"
            else:
                status = "FAIL"
            line = f"  [{status}] build {verdict.build:3d}: {verdict.value:g}"
            if verdict.failed_thresholds:
                line += "  (" + ", ".join(v.threshold for v in verdict.failed_thresholds) + ")"
            typer.echo(line)
        typer.echo()
        typer.echo(f"  {len(regressions)} of {len(verdicts)} builds violated thresholds.")

    if regressions:
        raise typer.Exit(1)


@app.command()
def extrema(
    values: Annotated[
        list[float],
        typer.Option("--value", "-x", help="Value of the next build (repeat in build order)."),
    ],
    failed: Annotated[
        list[int] | None,
        typer.Option("--failed", "-f", help="Build number whose run was marked failed (repeatable)."),
    ] = None,
) -> None:
    """Show the reported maximum, minimum and average of a series.

    When the most extreme value belongs to the latest build, the earlier
    best value is reported instead.
    """
    failed_builds = set(failed or [])
    history = MetricHistory()
    for build, value in enumerate(values):
        history.record(build, value, build in failed_builds)

    maximum = history.maximum()
    minimum = history.minimum()
    average = history.average()

    if state["json"]:
        result = {"maximum": maximum, "minimum": minimum, "average": average, "builds": len(history)}
        typer.echo(json.dumps(result, indent=2))
    else:
        typer.echo(f"  Maximum: {_format(maximum)}")
        typer.echo(f"  Minimum: {_format(minimum)}")
        typer.echo(f"  Average: {_format(average)}")


if __name__ == "__main__":
    app()
