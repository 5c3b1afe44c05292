"""Polynomial fitting and detrending of residual series.

Fits are computed with ``numpy.polynomial.Polynomial.fit``, which maps the
abscissa onto [-1, 1] before solving. Epochs in seconds of day are large
numbers, and a degree-9 fit on raw epochs would be badly conditioned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.polynomial import Polynomial

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)

DEFAULT_DEGREE = 9


@dataclass(frozen=True)
class PolynomialFit:
    """Result of a polynomial fit.

    Attributes:
        coefficients: Ascending-order coefficients in the scaled variable.
        domain: (min, max) of the fitted abscissa; mapped onto [-1, 1].
    """

    coefficients: tuple[float, ...]
    domain: tuple[float, float]

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    def as_polynomial(self) -> Polynomial:
        return Polynomial(list(self.coefficients), domain=list(self.domain), window=[-1.0, 1.0])

    def __call__(self, x: ArrayLike) -> NDArray[np.float64]:
        return evaluate(self, x)


def polynomial_fit(x: ArrayLike, y: ArrayLike, degree: int = DEFAULT_DEGREE) -> PolynomialFit | None:
    """Least-squares polynomial fit of ``y`` against ``x``.

    The degree is lowered when there are too few distinct abscissae to
    determine it (at most ``n_distinct - 1``).

    Returns:
        The fit, or None for empty or mismatched input or a negative degree.
    """
    xa = np.asarray(x, dtype=np.float64).reshape(-1)
    ya = np.asarray(y, dtype=np.float64).reshape(-1)
    if len(xa) == 0 or len(xa) != len(ya) or degree < 0:
        return None

    finite = np.isfinite(xa) & np.isfinite(ya)
    xa = xa[finite]
    ya = ya[finite]
    if len(xa) == 0:
        return None

    n_distinct = len(np.unique(xa))
    effective_degree = min(int(degree), n_distinct - 1)
    if effective_degree < int(degree):
        logger.debug(
            f"Lowering polynomial degree from {degree} to {effective_degree} "
            f"({n_distinct} distinct epochs)"
        )

    x_min = float(np.min(xa))
    x_max = float(np.max(xa))
    if x_max == x_min:
        # Single abscissa: a constant through the mean.
        return PolynomialFit(coefficients=(float(np.mean(ya)),), domain=(x_min - 0.5, x_max + 0.5))

    poly = Polynomial.fit(xa, ya, effective_degree, domain=[x_min, x_max])
    return PolynomialFit(
        coefficients=tuple(float(c) for c in poly.coef),
        domain=(x_min, x_max),
    )


def evaluate(fit: PolynomialFit, x: ArrayLike) -> NDArray[np.float64]:
    """Evaluate a fit at ``x``; pure function of its arguments."""
    xa = np.asarray(x, dtype=np.float64)
    return np.asarray(fit.as_polynomial()(xa), dtype=np.float64)


def detrend(
    times: ArrayLike,
    residuals: ArrayLike,
    degree: int = DEFAULT_DEGREE,
    *,
    fit_times: ArrayLike | None = None,
    fit_residuals: ArrayLike | None = None,
) -> NDArray[np.float64]:
    """Subtract a polynomial trend from a residual series.

    By default the trend is fitted on the series itself. Passing
    ``fit_times``/``fit_residuals`` fits the trend on another (usually
    cleaner) subset and removes it from the full series, which keeps the
    noise visible around the detrended returns.

    Returns:
        Detrended residuals, same length as ``residuals``. When no fit can be
        computed the residuals are returned unchanged.
    """
    t = np.asarray(times, dtype=np.float64).reshape(-1)
    r = np.asarray(residuals, dtype=np.float64).reshape(-1)
    if fit_times is None or fit_residuals is None:
        fit_times, fit_residuals = t, r

    fit = polynomial_fit(fit_times, fit_residuals, degree)
    if fit is None or len(t) != len(r):
        logger.warning("Cannot compute polynomial trend, returning residuals unchanged")
        return r.copy()
    return r - evaluate(fit, t)


def binned_fit_errors(
    times: ArrayLike,
    residuals: ArrayLike,
    bin_size: float,
    degree: int = DEFAULT_DEGREE,
) -> NDArray[np.float64]:
    """Deviation of each residual from a piecewise polynomial trend.

    Samples are walked in time order. A new fit window opens when a sample is
    more than ``bin_size`` seconds after the first sample of the current
    window, and each window gets its own polynomial.

    Returns:
        ``residual - fit`` for every sample, in the original sample order.
        Samples whose fit evaluates to NaN get their raw residual instead.
    """
    t = np.asarray(times, dtype=np.float64).reshape(-1)
    r = np.asarray(residuals, dtype=np.float64).reshape(-1)
    if len(t) == 0 or len(t) != len(r) or not bin_size > 0:
        return np.array([], dtype=np.float64)

    order = np.argsort(t, kind="stable")
    t_sorted = t[order]
    r_sorted = r[order]
    fitted = np.full(len(t), np.nan, dtype=np.float64)

    start = 0
    window_origin = t_sorted[0]
    for i in range(1, len(t_sorted) + 1):
        if i < len(t_sorted) and t_sorted[i] - window_origin <= bin_size:
            continue
        fit = polynomial_fit(t_sorted[start:i], r_sorted[start:i], degree)
        if fit is not None:
            fitted[start:i] = evaluate(fit, t_sorted[start:i])
        if i < len(t_sorted):
            start = i
            window_origin = t_sorted[i]

    errors_sorted = r_sorted - fitted
    errors_sorted = np.where(np.isnan(errors_sorted), r_sorted, errors_sorted)

    errors = np.empty_like(errors_sorted)
    errors[order] = errors_sorted
    return errors
