"""Pipeline orchestration for the public API.

Delegates to `slr_filter.pipeline` and `slr_filter.config`.
"""

from __future__ import annotations

from slr_filter.config import PipelineConfig, load_pipeline_config  # noqa: F401
from slr_filter.pipeline import (  # noqa: F401
    PipelineResult,
    StageResult,
    run_filter_pipeline,
    run_filter_pipelines,
    submit_filter_pipeline,
)

__all__ = [
    "PipelineConfig",
    "PipelineResult",
    "StageResult",
    "load_pipeline_config",
    "run_filter_pipeline",
    "run_filter_pipelines",
    "submit_filter_pipeline",
]
