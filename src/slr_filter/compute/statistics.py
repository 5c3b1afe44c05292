"""Distribution statistics for residual sets.

Conventions follow the ILRS normal-point practice:
- skew and kurtosis are the biased sample moments (kurtosis as Fisher excess)
- peak is the mean of the points within 1σ, iterated until it settles,
  starting from the 3σ-clipped mean
- rms_rejection iterates an ``rf × σ`` acceptance band around the mean
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats as scipy_stats

from slr_filter.domain.base import FrozenModel

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)


class ResidualStatistics(FrozenModel):
    """Summary of a residual distribution (picoseconds).

    Attributes:
        n: Number of values.
        mean: Arithmetic mean.
        rms: Root mean square, sqrt(mean(x**2)).
        stddev: Population standard deviation.
        skew: Biased sample skewness.
        kurtosis: Biased sample excess kurtosis.
        peak: 1σ-iterated mean, an estimate of the distribution mode.
    """

    n: int
    mean: float
    rms: float
    stddev: float
    skew: float
    kurtosis: float
    peak: float

    @property
    def peak_minus_mean(self) -> float:
        return self.peak - self.mean


class RejectionResult(FrozenModel):
    """Outcome of iterative ``rf × σ`` rejection.

    Attributes:
        accepted_mask: True for accepted values, in input order.
        accepted: Number of accepted values.
        rejected: Number of rejected values.
        iterations: Iterations run until the mask stopped changing.
        acceptance_rate: accepted / total (0 for empty input).
        statistics: Statistics of the accepted values.
    """

    accepted_mask: tuple[bool, ...]
    accepted: int
    rejected: int
    iterations: int
    acceptance_rate: float
    statistics: ResidualStatistics

    def accepted_indices(self) -> NDArray[np.intp]:
        return np.flatnonzero(np.asarray(self.accepted_mask, dtype=bool)).astype(np.intp)


def peak_estimate(values: ArrayLike, tolerance: float = 0.001, max_iterations: int = 20) -> float:
    """Estimate the distribution peak as an iterated 1σ mean.

    The starting point is the mean of values within 3σ of the overall mean.
    Each iteration re-centres on the mean of the values within 1σ (σ of the
    3σ-clipped set) of the previous estimate.
    """
    v = np.asarray(values, dtype=np.float64).reshape(-1)
    if len(v) == 0:
        return math.nan
    if len(v) == 1:
        return float(v[0])

    sigma = float(np.std(v))
    clipped = v[np.abs(v - np.mean(v)) < 3.0 * sigma]
    if len(clipped) == 0:
        clipped = v
    sigma = float(np.std(clipped))
    current = float(np.mean(clipped))

    for _ in range(max_iterations):
        near = v[np.abs(v - current) <= sigma]
        if len(near) == 0:
            break
        updated = float(np.mean(near))
        moved = abs(updated - current)
        current = updated
        if moved <= tolerance:
            break
    return current


def residual_statistics(values: ArrayLike) -> ResidualStatistics:
    """Compute mean, rms, stddev, skew, kurtosis and peak of ``values``.

    Empty input gives NaN statistics with ``n=0``; a single value gives zero
    spread and NaN higher moments.
    """
    v = np.asarray(values, dtype=np.float64).reshape(-1)
    v = v[np.isfinite(v)]
    n = len(v)
    if n == 0:
        return ResidualStatistics(
            n=0,
            mean=math.nan,
            rms=math.nan,
            stddev=math.nan,
            skew=math.nan,
            kurtosis=math.nan,
            peak=math.nan,
        )

    stddev = float(np.std(v))
    if n > 1 and stddev > 0:
        skew = float(scipy_stats.skew(v, bias=True))
        kurtosis = float(scipy_stats.kurtosis(v, fisher=True, bias=True))
    else:
        skew = math.nan
        kurtosis = math.nan

    return ResidualStatistics(
        n=n,
        mean=float(np.mean(v)),
        rms=float(np.sqrt(np.mean(v * v))),
        stddev=stddev,
        skew=skew,
        kurtosis=kurtosis,
        peak=peak_estimate(v),
    )


def rms_rejection(
    values: ArrayLike,
    rf: float = 2.5,
    max_iterations: int = 50,
) -> RejectionResult:
    """Iteratively reject values further than ``rf × σ`` from the mean.

    Mean and σ are recomputed on the accepted set each iteration, and every
    input value is re-tested (previously rejected values can come back). The
    loop ends when the acceptance mask stops changing or after
    ``max_iterations``.
    """
    v = np.asarray(values, dtype=np.float64).reshape(-1)
    finite = np.isfinite(v)
    mask = finite.copy()
    iterations = 0
    converged = False

    while iterations < max_iterations and np.any(mask):
        iterations += 1
        accepted = v[mask]
        mean = float(np.mean(accepted))
        sigma = float(np.std(accepted))
        new_mask = finite & (np.abs(v - mean) <= rf * sigma)
        if np.array_equal(new_mask, mask):
            converged = True
            break
        mask = new_mask

    if not converged and iterations >= max_iterations:
        logger.warning(f"rms rejection did not converge in {max_iterations} iterations")

    n_accepted = int(np.sum(mask))
    return RejectionResult(
        accepted_mask=tuple(bool(m) for m in mask),
        accepted=n_accepted,
        rejected=int(len(v) - n_accepted),
        iterations=iterations,
        acceptance_rate=(n_accepted / len(v)) if len(v) else 0.0,
        statistics=residual_statistics(v[mask]),
    )
