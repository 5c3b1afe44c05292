"""Residual distribution statistics for the public API.

Delegates to `slr_filter.compute.statistics`.
"""

from __future__ import annotations

from slr_filter.compute.statistics import (  # noqa: F401
    RejectionResult,
    ResidualStatistics,
    peak_estimate,
    residual_statistics,
    rms_rejection,
)

__all__ = [
    "RejectionResult",
    "ResidualStatistics",
    "peak_estimate",
    "residual_statistics",
    "rms_rejection",
]
