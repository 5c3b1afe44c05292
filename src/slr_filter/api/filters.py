"""Residual filtering API facade (host-facing).

The canonical implementations live in `slr_filter.compute`, but hosts should
import from `slr_filter.api.*` rather than deep-importing from the compute
package.
"""

from __future__ import annotations

from slr_filter.compute.binning import extract_bins  # noqa: F401
from slr_filter.compute.histogram import HistogramBucket, count_bin, histcounts  # noqa: F401
from slr_filter.compute.polyfit import (  # noqa: F401
    PolynomialFit,
    binned_fit_errors,
    detrend,
    evaluate,
    polynomial_fit,
)
from slr_filter.compute.postfilter import (  # noqa: F401
    ThresholdResult,
    auto_threshold_filter,
    hist_postfilter,
    threshold_filter,
)
from slr_filter.compute.prefilter import (  # noqa: F401
    hist_prefilter,
    hist_prefilter_bin,
    window_prefilter,
)

__all__ = [
    "HistogramBucket",
    "PolynomialFit",
    "ThresholdResult",
    "auto_threshold_filter",
    "binned_fit_errors",
    "count_bin",
    "detrend",
    "evaluate",
    "extract_bins",
    "hist_postfilter",
    "hist_prefilter",
    "hist_prefilter_bin",
    "histcounts",
    "polynomial_fit",
    "threshold_filter",
    "window_prefilter",
]
