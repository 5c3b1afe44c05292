"""Pure-compute primitives for SLR residual reduction.

This package contains only numpy/scipy operations over in-memory arrays:
- Histogram counting and time binning
- Window, histogram and polynomial-band filters
- Polynomial fitting and detrending
- Distribution statistics
- Smoothing filters
"""

from __future__ import annotations

from slr_filter.compute.binning import extract_bins
from slr_filter.compute.histogram import HistogramBucket, count_bin, histcounts
from slr_filter.compute.polyfit import (
    PolynomialFit,
    binned_fit_errors,
    detrend,
    evaluate,
    polynomial_fit,
)
from slr_filter.compute.postfilter import (
    ThresholdResult,
    auto_threshold_filter,
    hist_postfilter,
    threshold_filter,
)
from slr_filter.compute.prefilter import hist_prefilter, hist_prefilter_bin, window_prefilter
from slr_filter.compute.smoothing import exponential_smoothing, median_filter, moving_average
from slr_filter.compute.statistics import (
    RejectionResult,
    ResidualStatistics,
    peak_estimate,
    residual_statistics,
    rms_rejection,
)

__all__ = [
    "HistogramBucket",
    "PolynomialFit",
    "RejectionResult",
    "ResidualStatistics",
    "ThresholdResult",
    "auto_threshold_filter",
    "binned_fit_errors",
    "count_bin",
    "detrend",
    "evaluate",
    "exponential_smoothing",
    "extract_bins",
    "hist_postfilter",
    "hist_prefilter",
    "hist_prefilter_bin",
    "histcounts",
    "median_filter",
    "moving_average",
    "peak_estimate",
    "polynomial_fit",
    "residual_statistics",
    "rms_rejection",
    "threshold_filter",
    "window_prefilter",
]
