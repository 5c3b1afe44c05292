"""Equal-width histogram counting for residual sets.

Bucket ``i`` of an ``N``-bucket histogram over ``[min_edge, max_edge)`` covers
``[min_edge + i*w, min_edge + (i+1)*w)`` with ``w = (max_edge - min_edge) / N``.
Counting uses sorted searches, so the result does not depend on the order of
the input and each bucket is independent of the others.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


class HistogramBucket(NamedTuple):
    count: int
    lower: float
    upper: float


def count_bin(
    values: ArrayLike,
    lower: float,
    upper: float,
    exclude_lower: bool = False,
    exclude_upper: bool = True,
) -> int:
    """Count how many values fall in an interval.

    The default interval is ``[lower, upper)``. Either boundary can be made
    open or closed independently.

    Args:
        values: Values to count.
        lower: Lower boundary.
        upper: Upper boundary.
        exclude_lower: True for an open lower boundary.
        exclude_upper: True for an open upper boundary.

    Returns:
        Number of values inside the interval.

    Note:
        Floating-point boundaries are compared exactly; values that differ
        from an edge only by rounding may land on either side of it.
    """
    data = np.sort(np.asarray(values, dtype=np.float64).reshape(-1))
    counts = _count_sorted(
        data,
        np.array([lower], dtype=np.float64),
        np.array([upper], dtype=np.float64),
        exclude_lower,
        exclude_upper,
    )
    return int(counts[0])


def _count_sorted(
    sorted_data: NDArray[np.float64],
    lowers: NDArray[np.float64],
    uppers: NDArray[np.float64],
    exclude_lower: bool,
    exclude_upper: bool,
) -> NDArray[np.int64]:
    lower_side = "right" if exclude_lower else "left"
    upper_side = "left" if exclude_upper else "right"
    start = np.searchsorted(sorted_data, lowers, side=lower_side)
    stop = np.searchsorted(sorted_data, uppers, side=upper_side)
    return np.maximum(stop - start, 0).astype(np.int64)


def histogram_edges(
    n_buckets: int,
    min_edge: float,
    max_edge: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Lower and upper edges of each bucket.

    Neighbouring buckets share their common edge and the last upper edge is
    exactly ``max_edge``, so the buckets tile ``[min_edge, max_edge)``.
    """
    width = (float(max_edge) - float(min_edge)) / n_buckets
    edges = float(min_edge) + np.arange(n_buckets + 1, dtype=np.float64) * width
    edges[-1] = float(max_edge)
    return edges[:-1], edges[1:]


def histcounts(
    values: ArrayLike,
    n_buckets: int,
    min_edge: float | None = None,
    max_edge: float | None = None,
) -> list[HistogramBucket]:
    """Bin values into ``n_buckets`` equal-width buckets.

    When ``min_edge``/``max_edge`` are omitted the bounds come from the data
    extrema. Zero buckets or empty input return an empty histogram; callers
    are expected to validate their parameters first.

    Returns:
        Buckets in ascending order. The counts add up to the number of values
        inside ``[min_edge, max_edge)``.
    """
    data = np.sort(np.asarray(values, dtype=np.float64).reshape(-1))
    n_buckets = int(n_buckets)
    if n_buckets <= 0 or len(data) == 0:
        return []

    if min_edge is None:
        min_edge = float(data[0])
    if max_edge is None:
        max_edge = float(data[-1])

    lowers, uppers = histogram_edges(n_buckets, min_edge, max_edge)
    counts = _count_sorted(data, lowers, uppers, exclude_lower=False, exclude_upper=True)
    return [
        HistogramBucket(int(c), float(lo), float(hi))
        for c, lo, hi in zip(counts, lowers, uppers)
    ]


def bucket_counts(histogram: list[HistogramBucket]) -> NDArray[np.int64]:
    return np.array([b.count for b in histogram], dtype=np.int64)
