"""Manual smoothing filters for residual curves.

These are alternatives to the histogram pipeline for visual inspection:
- moving_average: Mean over a centred window clipped at the edges
- median_filter: Median over the same window, robust to isolated spikes
- exponential_smoothing: First-order recursive low-pass

Every filter returns ``(x, y_smoothed)`` with the same length and x values as
its input.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


def _as_xy(x: ArrayLike, y: ArrayLike) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    xa = np.array(x, dtype=np.float64).reshape(-1)
    ya = np.array(y, dtype=np.float64).reshape(-1)
    if len(xa) != len(ya):
        raise ValueError(f"x and y must have same length: {len(xa)} vs {len(ya)}")
    return xa, ya


def _smooths(window_size: float) -> bool:
    # NaN and inf sizes leave the input unchanged, like sizes <= 1.
    return math.isfinite(window_size) and window_size > 1


def _window_bounds(n: int, window_size: int) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    half = min(int(window_size) // 2, n)
    idx = np.arange(n)
    return np.maximum(idx - half, 0), np.minimum(idx + half, n - 1) + 1


def moving_average(
    x: ArrayLike,
    y: ArrayLike,
    window_size: int,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Simple moving average over ``y[i-h : i+h+1]`` with ``h = window_size // 2``.

    Windows are clipped at the series ends, so edge points average fewer
    neighbours. Empty input or ``window_size <= 1`` returns a copy.
    """
    xa, ya = _as_xy(x, y)
    if len(ya) == 0 or not _smooths(window_size):
        return xa, ya

    starts, stops = _window_bounds(len(ya), window_size)
    smoothed = np.empty_like(ya)
    for i, (start, stop) in enumerate(zip(starts, stops)):
        smoothed[i] = np.mean(ya[start:stop])
    return xa, smoothed


def median_filter(
    x: ArrayLike,
    y: ArrayLike,
    window_size: int,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Running median over the same clipped window as ``moving_average``.

    For windows with an even number of points (clipped edges) the upper of
    the two middle values is used. Empty input or ``window_size <= 1`` returns
    a copy.
    """
    xa, ya = _as_xy(x, y)
    if len(ya) == 0 or not _smooths(window_size):
        return xa, ya

    starts, stops = _window_bounds(len(ya), window_size)
    smoothed = np.empty_like(ya)
    for i, (start, stop) in enumerate(zip(starts, stops)):
        window = ya[start:stop]
        mid = len(window) // 2
        smoothed[i] = np.partition(window, mid)[mid]
    return xa, smoothed


def exponential_smoothing(
    x: ArrayLike,
    y: ArrayLike,
    alpha: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Exponential moving average ``s[i] = α·y[i] + (1-α)·s[i-1]``, ``s[0] = y[0]``.

    ``alpha`` is clamped to [0, 1]: 1 reproduces the input, 0 holds the first
    value for the whole series.
    """
    xa, ya = _as_xy(x, y)
    if len(ya) == 0:
        return xa, ya

    alpha = min(1.0, max(0.0, float(alpha)))
    smoothed = np.empty_like(ya)
    smoothed[0] = ya[0]
    for i in range(1, len(ya)):
        smoothed[i] = alpha * ya[i] + (1.0 - alpha) * smoothed[i - 1]
    return xa, smoothed
