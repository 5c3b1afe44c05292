"""Shared helpers for click-based `slrf` commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from slr_filter.domain.residuals import ResidualSeries

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_RUNTIME_ERROR = 2
EXIT_DATA_UNAVAILABLE = 4


class SlrCliError(click.ClickException):
    """Click exception with explicit exit-code control."""

    def __init__(self, message: str, *, exit_code: int = EXIT_INPUT_ERROR) -> None:
        super().__init__(message)
        self.exit_code = int(exit_code)


def dump_json_output(payload: dict[str, Any], out_path: Path | None) -> None:
    """Write JSON payload to file or stdout."""
    text = json.dumps(payload, sort_keys=True, indent=2)
    if out_path is None:
        click.echo(text)
        return
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text + "\n", encoding="utf-8")


def load_json_file(path: Path, *, label: str) -> dict[str, Any]:
    """Load an object JSON file with user-facing errors."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SlrCliError(f"{label} not found: {path}") from exc
    except OSError as exc:
        raise SlrCliError(f"Cannot read {label}: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SlrCliError(f"Malformed JSON in {label}: {exc}") from exc

    if not isinstance(payload, dict):
        raise SlrCliError(f"{label} must be a JSON object")
    return payload


def load_residual_series(path: Path) -> ResidualSeries:
    """Read ``{"time": [...], "residual": [...]}`` into a ResidualSeries."""
    payload = load_json_file(path, label="residual file")
    missing = [key for key in ("time", "residual") if key not in payload]
    if missing:
        raise SlrCliError(f"residual file is missing keys: {', '.join(missing)}")
    try:
        return ResidualSeries.from_arrays(payload["time"], payload["residual"])
    except (TypeError, ValueError) as exc:
        raise SlrCliError(f"Invalid residual file: {exc}") from exc


def resolve_optional_output_path(output_arg: str | None) -> Path | None:
    """Map '-', empty, or None to stdout; otherwise return filesystem path."""
    if output_arg is None:
        return None
    value = str(output_arg).strip()
    if value in {"", "-"}:
        return None
    return Path(value)
