"""Pipeline configuration.

Configuration is a frozen pydantic model. It can be built in code, read from a
JSON object, and overridden per field from the environment:

- ``SLR_FILTER_CONFIG``: path of a JSON config file used when no explicit path
  is given
- ``SLR_FILTER_<FIELD>``: value for one field (e.g. ``SLR_FILTER_BIN_SIZE_S=15``),
  applied on top of the file values
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from slr_filter.errors import ConfigError
from slr_filter.utils.units import metres_to_ps

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "SLR_FILTER_CONFIG"
ENV_PREFIX = "SLR_FILTER_"


class PipelineConfig(BaseModel):
    """Tuning parameters of the residual filter pipeline.

    Residual quantities are in picoseconds and times in seconds.

    Attributes:
        window_lower_ps: Lower bound of the residual window, or None to skip windowing.
        window_upper_ps: Upper bound of the residual window, or None to skip windowing.
        bin_size_s: Time bin width for the histogram prefilter and fit errors.
        depth_ps: Histogram bucket width of the prefilter (before division).
        min_photons: Minimum bucket occupancy of the prefilter (before division).
        divisions: Subdivision factor for depth and min_photons.
        post_depth_ps: Postfilter depth; the acceptance half-band is 1.5x this.
        post_degree: Degree of the postfilter trend polynomial.
        apply_threshold_filter: Run the iterative fit-error threshold after the postfilter.
        threshold_factor: Threshold band in units of the fit-error sigma.
        max_threshold_passes: Upper bound on threshold iterations.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    window_lower_ps: float | None = None
    window_upper_ps: float | None = None
    bin_size_s: float = Field(default=30.0, gt=0)
    depth_ps: float = Field(default=1000.0, gt=0)
    min_photons: int = Field(default=5, ge=0)
    divisions: int = Field(default=1, ge=1)
    post_depth_ps: float = Field(default=500.0, gt=0)
    post_degree: int = Field(default=9, ge=0)
    apply_threshold_filter: bool = False
    threshold_factor: float = Field(default=2.5, gt=0)
    max_threshold_passes: int = Field(default=20, ge=1)

    @model_validator(mode="after")
    def _check_window(self) -> PipelineConfig:
        lower, upper = self.window_lower_ps, self.window_upper_ps
        if (lower is None) != (upper is None):
            raise ValueError("window_lower_ps and window_upper_ps must be set together")
        if lower is not None and upper is not None and not upper > lower:
            raise ValueError("window_upper_ps must be greater than window_lower_ps")
        return self

    @property
    def has_window(self) -> bool:
        return self.window_lower_ps is not None and self.window_upper_ps is not None

    @classmethod
    def from_metres(
        cls,
        *,
        depth_m: float,
        post_depth_m: float,
        **kwargs: Any,
    ) -> PipelineConfig:
        """Build a config with depths given in metres of two-way range.

        Any other field can be passed through ``kwargs``.
        """
        return cls(depth_ps=metres_to_ps(depth_m), post_depth_ps=metres_to_ps(post_depth_m), **kwargs)


def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for name in PipelineConfig.model_fields:
        value = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if value is not None and value != "":
            overrides[name] = value
    return overrides


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return payload


def load_pipeline_config(path: str | Path | None = None) -> PipelineConfig:
    """Load a ``PipelineConfig`` from JSON and the environment.

    Args:
        path: JSON file with a config object. When None, ``SLR_FILTER_CONFIG``
            is consulted and, if unset, the defaults are used.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object, or the
            merged values do not validate.
    """
    if path is None:
        env_path = os.getenv(CONFIG_PATH_ENV)
        path = Path(env_path).expanduser() if env_path else None

    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_config_file(Path(path)))

    overrides = _env_overrides()
    if overrides:
        logger.debug(f"Config overrides from environment: {sorted(overrides)}")
        values.update(overrides)

    try:
        return PipelineConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pipeline config: {exc}") from exc
