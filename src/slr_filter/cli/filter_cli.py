"""`slrf filter` command: run the residual filter pipeline on one pass."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from slr_filter.cli.common_cli import (
    EXIT_INPUT_ERROR,
    SlrCliError,
    dump_json_output,
    load_residual_series,
    resolve_optional_output_path,
)
from slr_filter.config import PipelineConfig, load_pipeline_config
from slr_filter.errors import ConfigError
from slr_filter.pipeline import run_filter_pipeline


def _resolve_config(config_path: Path | None, overrides: dict[str, Any]) -> PipelineConfig:
    try:
        base = load_pipeline_config(config_path)
    except ConfigError as exc:
        raise SlrCliError(str(exc), exit_code=EXIT_INPUT_ERROR) from exc

    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return base
    try:
        return PipelineConfig.model_validate({**base.model_dump(), **updates})
    except ValidationError as exc:
        raise SlrCliError(f"Invalid pipeline option: {exc}", exit_code=EXIT_INPUT_ERROR) from exc


@click.command("filter")
@click.argument("input_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Pipeline config JSON (defaults to $SLR_FILTER_CONFIG or built-in defaults).",
)
@click.option("--window-lower", type=float, default=None, help="Residual window lower bound (ps).")
@click.option("--window-upper", type=float, default=None, help="Residual window upper bound (ps).")
@click.option("--bin-size", type=float, default=None, help="Time bin width (s).")
@click.option("--depth", type=float, default=None, help="Prefilter bucket width (ps).")
@click.option("--min-photons", type=int, default=None, help="Prefilter minimum bucket occupancy.")
@click.option("--divisions", type=int, default=None, help="Prefilter subdivision factor.")
@click.option("--post-depth", type=float, default=None, help="Postfilter depth (ps).")
@click.option(
    "--threshold/--no-threshold",
    "apply_threshold",
    default=None,
    help="Run the iterative fit-error threshold after the postfilter.",
)
@click.option(
    "--out",
    "output_path_arg",
    type=str,
    default="-",
    show_default=True,
    help="JSON output path or '-' for stdout.",
)
def filter_command(
    input_path: Path,
    config_path: Path | None,
    window_lower: float | None,
    window_upper: float | None,
    bin_size: float | None,
    depth: float | None,
    min_photons: int | None,
    divisions: int | None,
    post_depth: float | None,
    apply_threshold: bool | None,
    output_path_arg: str,
) -> None:
    """Classify the residuals in INPUT_PATH ({"time": [...], "residual": [...]})."""
    series = load_residual_series(input_path)
    config = _resolve_config(
        config_path,
        {
            "window_lower_ps": window_lower,
            "window_upper_ps": window_upper,
            "bin_size_s": bin_size,
            "depth_ps": depth,
            "min_photons": min_photons,
            "divisions": divisions,
            "post_depth_ps": post_depth,
            "apply_threshold_filter": apply_threshold,
        },
    )

    result = run_filter_pipeline(series, config)
    payload = {
        "schema_version": 1,
        "config": config.model_dump(),
        "result": result.to_dict(),
    }
    dump_json_output(payload, resolve_optional_output_path(output_path_arg))
