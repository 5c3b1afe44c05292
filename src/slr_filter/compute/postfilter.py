"""Postfilters applied to prefiltered residuals.

- hist_postfilter: Global polynomial detrend with a fixed acceptance band
- threshold_filter: Symmetric sigma band on fit errors
- auto_threshold_filter: Repeated fit-error thresholding until it settles
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

from slr_filter.compute.polyfit import DEFAULT_DEGREE, binned_fit_errors, evaluate, polynomial_fit

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)

# Acceptance half-width as a multiple of the filter depth.
BAND_FACTOR = 1.5


def hist_postfilter(
    times: ArrayLike,
    residuals: ArrayLike,
    depth: float,
    degree: int = DEFAULT_DEGREE,
) -> NDArray[np.intp]:
    """Keep residuals within ``1.5 * depth`` of a global polynomial trend.

    A single polynomial of ``degree`` (9 by default) is fitted to the whole
    series and every sample with ``fit(t) - rf <= residual <= fit(t) + rf``,
    ``rf = 1.5 * depth``, is accepted.

    Returns:
        Ascending indices into the input. Empty for empty or mismatched
        input or a non-positive depth.
    """
    t = np.asarray(times, dtype=np.float64).reshape(-1)
    r = np.asarray(residuals, dtype=np.float64).reshape(-1)
    if len(t) == 0 or len(t) != len(r) or not depth > 0:
        return np.array([], dtype=np.intp)

    fit = polynomial_fit(t, r, degree)
    if fit is None:
        logger.warning("Postfilter could not fit a trend, no residuals accepted")
        return np.array([], dtype=np.intp)

    rf = float(depth) * BAND_FACTOR
    trend = evaluate(fit, t)
    accepted = np.flatnonzero((r >= trend - rf) & (r <= trend + rf)).astype(np.intp)
    logger.debug(f"Postfilter kept {len(accepted)} of {len(r)} residuals (rf={rf:.1f} ps)")
    return accepted


def threshold_filter(errors: ArrayLike, factor: float = 2.5) -> NDArray[np.intp]:
    """Indices of fit errors strictly inside ``±factor·σ``.

    σ is the population standard deviation of ``errors``. A constant error
    series has σ = 0 and nothing passes the strict band.
    """
    e = np.asarray(errors, dtype=np.float64).reshape(-1)
    if len(e) == 0:
        return np.array([], dtype=np.intp)
    thresh = float(factor) * float(np.std(e))
    return np.flatnonzero((e > -thresh) & (e < thresh)).astype(np.intp)


class ThresholdResult(NamedTuple):
    indices: NDArray[np.intp]
    passes: int


def auto_threshold_filter(
    times: ArrayLike,
    residuals: ArrayLike,
    bin_size: float,
    factor: float = 2.5,
    max_passes: int = 20,
    degree: int = DEFAULT_DEGREE,
) -> ThresholdResult:
    """Iterate piecewise-fit thresholding until no more samples are removed.

    Each pass recomputes ``binned_fit_errors`` on the surviving samples and
    applies ``threshold_filter``. Iteration stops after a pass that removes
    nothing or after ``max_passes`` passes.

    Returns:
        Surviving indices into the original input and the number of passes run.
    """
    t = np.asarray(times, dtype=np.float64).reshape(-1)
    r = np.asarray(residuals, dtype=np.float64).reshape(-1)
    if len(t) == 0 or len(t) != len(r) or not bin_size > 0 or max_passes <= 0:
        return ThresholdResult(np.array([], dtype=np.intp), 0)

    surviving = np.arange(len(t), dtype=np.intp)
    passes = 0
    while passes < max_passes:
        passes += 1
        errors = binned_fit_errors(t[surviving], r[surviving], bin_size, degree)
        kept = threshold_filter(errors, factor)
        removed = len(surviving) - len(kept)
        surviving = surviving[kept]
        logger.debug(f"Threshold pass {passes}: removed {removed}, {len(surviving)} remain")
        if removed == 0 or len(surviving) == 0:
            break

    return ThresholdResult(surviving, passes)
