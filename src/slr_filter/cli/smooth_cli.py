"""`slrf smooth` command: smooth a residual series for display."""

from __future__ import annotations

from pathlib import Path

import click

from slr_filter.cli.common_cli import (
    dump_json_output,
    load_residual_series,
    resolve_optional_output_path,
)
from slr_filter.compute.smoothing import exponential_smoothing, median_filter, moving_average

_METHODS = ("moving-average", "median", "exponential")


@click.command("smooth")
@click.argument("input_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--method",
    type=click.Choice(_METHODS),
    default="moving-average",
    show_default=True,
)
@click.option("--window", "window_size", type=int, default=5, show_default=True)
@click.option("--alpha", type=float, default=0.5, show_default=True, help="Exponential smoothing factor.")
@click.option(
    "--out",
    "output_path_arg",
    type=str,
    default="-",
    show_default=True,
    help="JSON output path or '-' for stdout.",
)
def smooth_command(
    input_path: Path,
    method: str,
    window_size: int,
    alpha: float,
    output_path_arg: str,
) -> None:
    """Smooth the residuals in INPUT_PATH ({"time": [...], "residual": [...]})."""
    series = load_residual_series(input_path)
    if method == "moving-average":
        x, y = moving_average(series.time, series.residual, window_size)
    elif method == "median":
        x, y = median_filter(series.time, series.residual, window_size)
    else:
        x, y = exponential_smoothing(series.time, series.residual, alpha)

    payload = {
        "schema_version": 1,
        "method": method,
        "time": x.tolist(),
        "residual": y.tolist(),
    }
    dump_json_output(payload, resolve_optional_output_path(output_path_arg))
