"""Residual filter pipeline orchestration.

Chains the compute stages over one pass:

    window (optional) -> histogram prefilter -> polynomial postfilter
    -> threshold auto-filter (optional)

Each stage works on the survivors of the previous one; the result reports every
stage's selection as indices into the original series. Stages never mutate
their inputs; classification is returned as a new flag array.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from concurrent.futures import Executor, Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np

from slr_filter.compute.postfilter import auto_threshold_filter, hist_postfilter
from slr_filter.compute.prefilter import hist_prefilter, window_prefilter
from slr_filter.compute.statistics import ResidualStatistics, residual_statistics
from slr_filter.config import PipelineConfig
from slr_filter.domain.residuals import FilterFlag, ResidualSeries
from slr_filter.errors import ErrorEnvelope, ErrorType, make_error

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

STAGE_WINDOW = "window"
STAGE_PREFILTER = "prefilter"
STAGE_POSTFILTER = "postfilter"
STAGE_THRESHOLD = "threshold"


class StageResult(NamedTuple):
    name: str
    indices: NDArray[np.intp]


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one pipeline run.

    Attributes:
        n_input: Number of samples in the input series.
        stages: Stages that ran, in order, with their accepted indices into
            the input series.
        accepted: Final accepted indices into the input series.
        flags: DATA for accepted samples, NOISE for the rest.
        statistics: Statistics of the accepted residuals.
        threshold_passes: Passes run by the threshold auto-filter (0 if skipped).
        diagnostics: Warnings raised while running (e.g. an empty stage).
    """

    n_input: int
    stages: tuple[StageResult, ...]
    accepted: NDArray[np.intp]
    flags: NDArray[np.int_]
    statistics: ResidualStatistics
    threshold_passes: int = 0
    diagnostics: tuple[ErrorEnvelope, ...] = field(default_factory=tuple)

    @property
    def n_accepted(self) -> int:
        return int(len(self.accepted))

    @property
    def completed(self) -> bool:
        return not self.diagnostics

    def stage_indices(self, name: str) -> NDArray[np.intp] | None:
        for stage in self.stages:
            if stage.name == name:
                return stage.indices
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "n_input": self.n_input,
            "n_accepted": self.n_accepted,
            "stages": {stage.name: stage.indices.tolist() for stage in self.stages},
            "accepted": self.accepted.tolist(),
            "flags": [int(f) for f in self.flags],
            "threshold_passes": self.threshold_passes,
            "statistics": {
                key: (value if not isinstance(value, float) or math.isfinite(value) else None)
                for key, value in self.statistics.model_dump().items()
            },
            "diagnostics": [d.model_dump(mode="json") for d in self.diagnostics],
        }


def _empty_stage(name: str, n_before: int) -> ErrorEnvelope:
    logger.warning(f"Pipeline stage '{name}' selected none of {n_before} residuals; stopping")
    return make_error(
        ErrorType.EMPTY_RESULT,
        f"{name} stage selected no residuals",
        stage=name,
        n_before=n_before,
    )


def run_filter_pipeline(series: ResidualSeries, config: PipelineConfig | None = None) -> PipelineResult:
    """Filter one pass of residuals.

    Args:
        series: Time-ordered residuals of the pass.
        config: Pipeline parameters; defaults to ``PipelineConfig()``.

    Returns:
        PipelineResult with per-stage selections and final flags. If a stage
        selects nothing the remaining stages are skipped and a diagnostic is
        attached.
    """
    config = config or PipelineConfig()
    t = series.time
    r = series.residual
    n = len(series)

    stages: list[StageResult] = []
    diagnostics: list[ErrorEnvelope] = []
    passes = 0
    current = np.arange(n, dtype=np.intp)

    if n == 0:
        logger.warning("Pipeline received an empty residual series")
        diagnostics.append(make_error(ErrorType.INVALID_DATA, "empty residual series"))

    def _record(name: str, selected: NDArray[np.intp]) -> bool:
        nonlocal current
        n_before = len(current)
        current = current[selected]
        stages.append(StageResult(name, current))
        if len(current) == 0:
            diagnostics.append(_empty_stage(name, n_before))
            return False
        return True

    ok = n > 0
    if ok and config.has_window:
        ok = _record(
            STAGE_WINDOW,
            window_prefilter(r[current], config.window_lower_ps, config.window_upper_ps),
        )
    if ok:
        ok = _record(
            STAGE_PREFILTER,
            hist_prefilter(
                t[current],
                r[current],
                config.bin_size_s,
                config.depth_ps,
                config.min_photons,
                config.divisions,
            ),
        )
    if ok:
        ok = _record(
            STAGE_POSTFILTER,
            hist_postfilter(t[current], r[current], config.post_depth_ps, config.post_degree),
        )
    if ok and config.apply_threshold_filter:
        threshold = auto_threshold_filter(
            t[current],
            r[current],
            config.bin_size_s,
            factor=config.threshold_factor,
            max_passes=config.max_threshold_passes,
            degree=config.post_degree,
        )
        passes = threshold.passes
        ok = _record(STAGE_THRESHOLD, threshold.indices)

    accepted = current if ok else np.array([], dtype=np.intp)
    flags = np.full(n, int(FilterFlag.NOISE), dtype=np.int_)
    flags[accepted] = int(FilterFlag.DATA)

    logger.info(f"Pipeline accepted {len(accepted)} of {n} residuals")
    return PipelineResult(
        n_input=n,
        stages=tuple(stages),
        accepted=accepted,
        flags=flags,
        statistics=residual_statistics(r[accepted]),
        threshold_passes=passes,
        diagnostics=tuple(diagnostics),
    )


def submit_filter_pipeline(
    executor: Executor,
    series: ResidualSeries,
    config: PipelineConfig | None = None,
) -> Future[PipelineResult]:
    """Schedule ``run_filter_pipeline`` on ``executor``.

    The run cannot be interrupted once started; cancelling the future only
    has an effect while it is still queued.
    """
    return executor.submit(run_filter_pipeline, series, config)


def run_filter_pipelines(
    passes: Mapping[str, ResidualSeries],
    config: PipelineConfig | None = None,
    *,
    max_workers: int = 4,
) -> dict[str, PipelineResult]:
    """Filter several passes concurrently, keyed like ``passes``."""
    results: dict[str, PipelineResult] = {}
    max_workers_eff = max(1, int(max_workers))
    with ThreadPoolExecutor(max_workers=max_workers_eff) as pool:
        future_map = {
            submit_filter_pipeline(pool, series, config): name for name, series in passes.items()
        }
        for fut in as_completed(future_map):
            results[future_map[fut]] = fut.result()
    return {name: results[name] for name in passes}
