"""Window and histogram prefilters for SLR residuals.

Genuine satellite returns cluster tightly in residual space inside a short
time bin, while background photons spread over the whole range gate. The
histogram prefilter exploits this without any orbit knowledge:

- window_prefilter: Hard residual bandpass
- hist_prefilter_bin: Histogram-peak separator for the residuals of one time bin
- hist_prefilter: Pass-level driver that bins by time and merges the selections

All functions return index arrays into their input and never raise for
malformed numeric parameters; they return an empty selection instead.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from slr_filter.compute.binning import extract_bins
from slr_filter.compute.histogram import bucket_counts, histcounts

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)


def _empty_indices() -> NDArray[np.intp]:
    return np.array([], dtype=np.intp)


def window_prefilter(
    residuals: ArrayLike,
    lower: float,
    upper: float,
) -> NDArray[np.intp]:
    """Indices of residuals inside the closed window ``[lower, upper]``.

    Empty input or ``upper <= lower`` yields an empty selection. Applying the
    window again to its own output selects everything.
    """
    r = np.asarray(residuals, dtype=np.float64).reshape(-1)
    if len(r) == 0 or not upper > lower:
        return _empty_indices()
    return np.flatnonzero((r >= lower) & (r <= upper)).astype(np.intp)


def hist_prefilter_bin(
    residuals: ArrayLike,
    depth: float,
    min_photons: int,
) -> NDArray[np.intp]:
    """Select the clustered returns of a single time bin.

    The residual range is cut into buckets ``depth`` wide and the most
    populated bucket is located (first one on ties). If it holds fewer than
    ``min_photons`` residuals the bin yields nothing. Otherwise the accepted
    span grows bucket by bucket to each side while the neighbours hold at
    least ``min_photons``, and every residual inside the span is selected.

    The bucket count is ``floor((|min| + |max|) / depth)``. Using the sum of
    magnitudes rather than ``max - min`` keeps the bucket layout symmetric for
    residuals centred on zero.

    Args:
        residuals: Residuals of one bin (picoseconds).
        depth: Target bucket width (picoseconds).
        min_photons: Minimum bucket occupancy for a bucket to be accepted.

    Returns:
        Ascending indices into ``residuals``.
    """
    r = np.asarray(residuals, dtype=np.float64).reshape(-1)
    if len(r) == 0 or not depth > 0 or not min_photons >= 0:
        return _empty_indices()

    low = float(np.min(r))
    high = float(np.max(r))
    range_width = abs(low) + abs(high)
    if not math.isfinite(range_width):
        logger.warning("Non-finite residuals in bin, skipping histogram prefilter for it")
        return _empty_indices()

    hist_size = int(math.floor(range_width / depth))
    histogram = histcounts(r, hist_size, low, high)
    if not histogram:
        return _empty_indices()

    counts = bucket_counts(histogram)
    peak = int(np.argmax(counts))
    if counts[peak] < min_photons:
        return _empty_indices()

    first = peak
    while first - 1 >= 0 and counts[first - 1] >= min_photons:
        first -= 1
    last = peak
    while last + 1 < len(counts) and counts[last + 1] >= min_photons:
        last += 1

    span_lower = histogram[first].lower
    span_upper = histogram[last].upper
    if last == len(histogram) - 1:
        # The top bucket also owns the bin maximum.
        mask = (r >= span_lower) & (r <= high)
    else:
        mask = (r >= span_lower) & (r < span_upper)
    return np.flatnonzero(mask).astype(np.intp)


def hist_prefilter(
    times: ArrayLike,
    residuals: ArrayLike,
    bin_size: float,
    depth: float,
    min_photons: int,
    divisions: int = 1,
) -> NDArray[np.intp]:
    """Run the histogram prefilter over a full pass.

    The pass is split into time bins (see ``extract_bins``), each bin is
    filtered with ``depth / divisions`` and ``min_photons // divisions``, and
    the per-bin selections are merged back into pass-level indices.

    Args:
        times: Epochs in seconds, in acquisition order.
        residuals: Residuals in picoseconds.
        bin_size: Time bin width in seconds.
        depth: Bucket width in picoseconds before division.
        min_photons: Minimum bucket occupancy before division.
        divisions: Subdivision factor applied to depth and min_photons.

    Returns:
        Ascending indices into the pass. Empty for empty input, mismatched
        lengths, non-positive ``bin_size``/``depth``/``divisions``, negative
        ``min_photons`` or non-finite parameters.
    """
    t = np.asarray(times, dtype=np.float64).reshape(-1)
    r = np.asarray(residuals, dtype=np.float64).reshape(-1)
    if (
        len(t) == 0
        or len(t) != len(r)
        or not bin_size > 0
        or not depth > 0
        or not math.isfinite(divisions)
        or not divisions >= 1
        or not math.isfinite(min_photons)
        or not min_photons >= 0
    ):
        return _empty_indices()

    divisions = int(divisions)
    bin_depth = float(depth) / divisions
    bin_min_photons = int(min_photons) // divisions

    selected: list[NDArray[np.intp]] = []
    offset = 0
    bins = extract_bins(t, r, bin_size)
    for bin_indexes in bins:
        local = hist_prefilter_bin(r[bin_indexes], bin_depth, bin_min_photons)
        selected.append(local + offset)
        offset += len(bin_indexes)

    result = np.concatenate(selected).astype(np.intp) if selected else _empty_indices()
    logger.debug(
        f"Histogram prefilter kept {len(result)} of {len(r)} residuals in {len(bins)} bins "
        f"(depth={bin_depth:.1f} ps, min_photons={bin_min_photons})"
    )
    return result
