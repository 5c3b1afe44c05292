"""Smoothing filters for the public API.

Delegates to `slr_filter.compute.smoothing`.
"""

from __future__ import annotations

from slr_filter.compute.smoothing import (  # noqa: F401
    exponential_smoothing,
    median_filter,
    moving_average,
)

__all__ = ["exponential_smoothing", "median_filter", "moving_average"]
