"""Chronological time binning of residual samples."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


def bin_numbers(times: ArrayLike, bin_size: float) -> NDArray[np.int64]:
    """Bin number of each epoch: ``floor(t / bin_size) + 1``."""
    t = np.asarray(times, dtype=np.float64).reshape(-1)
    return (np.floor(t / float(bin_size)) + 1).astype(np.int64)


def extract_bins(
    times: ArrayLike,
    residuals: ArrayLike,
    bin_size: float,
) -> list[NDArray[np.intp]]:
    """Split samples into runs of consecutive indices sharing a time bin.

    A new run starts whenever the bin number changes with respect to the
    previous sample. The input is not sorted, so a pass that returns to an
    earlier bin opens a new run rather than rejoining the old one. The final
    run is always emitted.

    Args:
        times: Sample epochs in seconds, in acquisition order.
        residuals: Residuals, same length as ``times``.
        bin_size: Bin width in seconds (> 0).

    Returns:
        Index arrays whose in-order concatenation is ``0 .. len(times)-1``.
        Empty input, a length mismatch or a non-positive bin size return ``[]``.
    """
    t = np.asarray(times, dtype=np.float64).reshape(-1)
    r = np.asarray(residuals).reshape(-1)
    if len(t) == 0 or len(r) == 0 or len(t) != len(r) or not bin_size > 0:
        return []

    bins = bin_numbers(t, bin_size)
    boundaries = np.flatnonzero(np.diff(bins) != 0) + 1
    return [run.astype(np.intp) for run in np.split(np.arange(len(t)), boundaries)]
