"""Public API for slr-filter.

Types:
- ResidualSeries: Time-ordered (epoch, residual) pairs of one pass
- FilterFlag: UNKNOWN / NOISE / DATA classification
- TrackingSession / RangeData: In-memory tracking session and its shots
- PipelineConfig / PipelineResult: Pipeline parameters and outcome
- TOFPrediction: Predicted two-way flight time at one epoch

Filtering:
- window_prefilter: Hard residual window
- hist_prefilter: Histogram-peak separator over time bins
- hist_postfilter: Polynomial trend band
- auto_threshold_filter: Iterative fit-error thresholding
- run_filter_pipeline: All of the above chained

Prediction:
- CPFPredictor: Two-way flight time from a CPF ephemeris

Smoothing and statistics:
- moving_average, median_filter, exponential_smoothing
- residual_statistics, rms_rejection
"""

from __future__ import annotations

from slr_filter.api.ephemeris import (  # noqa: F401
    INVALID_TOF,
    CPFPredictor,
    StationPosition,
    TOFPrediction,
    station_from_geodetic,
)
from slr_filter.api.filters import (  # noqa: F401
    auto_threshold_filter,
    detrend,
    extract_bins,
    hist_postfilter,
    hist_prefilter,
    histcounts,
    polynomial_fit,
    window_prefilter,
)
from slr_filter.api.pipeline import (  # noqa: F401
    PipelineConfig,
    PipelineResult,
    load_pipeline_config,
    run_filter_pipeline,
    submit_filter_pipeline,
)
from slr_filter.api.smoothing import (  # noqa: F401
    exponential_smoothing,
    median_filter,
    moving_average,
)
from slr_filter.api.statistics import residual_statistics, rms_rejection  # noqa: F401
from slr_filter.domain import FilterFlag, RangeData, ResidualSeries, TrackingSession  # noqa: F401

__all__ = [
    "CPFPredictor",
    "FilterFlag",
    "INVALID_TOF",
    "PipelineConfig",
    "PipelineResult",
    "RangeData",
    "ResidualSeries",
    "StationPosition",
    "TOFPrediction",
    "TrackingSession",
    "auto_threshold_filter",
    "detrend",
    "exponential_smoothing",
    "extract_bins",
    "hist_postfilter",
    "hist_prefilter",
    "histcounts",
    "load_pipeline_config",
    "median_filter",
    "moving_average",
    "polynomial_fit",
    "residual_statistics",
    "rms_rejection",
    "run_filter_pipeline",
    "station_from_geodetic",
    "submit_filter_pipeline",
    "window_prefilter",
]
