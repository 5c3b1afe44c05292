"""Tracking session domain models.

A tracking session is produced by external readers (the core never owns
files). It is held here as immutable records so filter stages and residual
recomputation always return new sessions instead of editing flags in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

import numpy as np

from slr_filter.domain.residuals import FilterFlag, ResidualSeries
from slr_filter.utils.units import SECONDS_PER_DAY

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from slr_filter.domain.ephemeris import TOFPrediction

logger = logging.getLogger(__name__)


class FilterMode(IntEnum):
    RAW = 0
    MANUAL = 1
    AUTO = 2


class TOFPredictor(Protocol):
    def predict(self, mjd: int, seconds_of_day: float) -> TOFPrediction | None: ...


@dataclass(frozen=True)
class RangeData:
    """One ranging shot. Times of flight and corrections are in picoseconds.

    Attributes:
        start_time: Fire epoch in seconds of day (restarts at 0 after midnight).
        tof_2w: Observed two-way time of flight.
        pre_2w: Predicted two-way time of flight.
        trop_corr_2w: Two-way tropospheric correction.
        bias: Per-shot bias.
        flag: Caller-owned classification.
    """

    start_time: float
    tof_2w: float
    pre_2w: float
    trop_corr_2w: float = 0.0
    bias: float = 0.0
    flag: FilterFlag = FilterFlag.UNKNOWN


def unwrap_start_times(start_times: ArrayLike) -> NDArray[np.float64]:
    """Make seconds-of-day epochs continuous across midnight.

    Every time a start time is lower than its predecessor a further 86400 s
    offset is added to it and to everything after it.
    """
    t = np.asarray(start_times, dtype=np.float64).reshape(-1)
    if len(t) < 2:
        return t.copy()
    rollovers = np.concatenate([[0], np.cumsum(np.diff(t) < 0)])
    return t + rollovers * SECONDS_PER_DAY


@dataclass(frozen=True)
class TrackingSession:
    """An in-memory SLR pass.

    Attributes:
        object_name: Target name.
        start_mjd: Modified Julian Day of the first shot.
        ranges: Shots in acquisition order.
        calibration_overall: Overall system delay (ps) subtracted from residuals.
        bin_size_s: Normal-point bin size of the target (seconds).
        filter_mode: How the current flags were produced.
    """

    object_name: str
    start_mjd: int
    ranges: tuple[RangeData, ...] = field(default_factory=tuple)
    calibration_overall: float = 0.0
    bin_size_s: float = 30.0
    filter_mode: FilterMode = FilterMode.RAW

    def __len__(self) -> int:
        return len(self.ranges)

    @property
    def epochs_s(self) -> NDArray[np.float64]:
        """Shot epochs in seconds since midnight of ``start_mjd``."""
        return unwrap_start_times([r.start_time for r in self.ranges])

    @property
    def flags(self) -> NDArray[np.int_]:
        return np.array([int(r.flag) for r in self.ranges], dtype=np.int_)

    def residuals(self, *, subtract_calibration: bool = True) -> ResidualSeries:
        """Residuals ``tof − pre − trop`` (optionally minus the overall calibration)."""
        tof = np.array([r.tof_2w for r in self.ranges], dtype=np.float64)
        pre = np.array([r.pre_2w for r in self.ranges], dtype=np.float64)
        trop = np.array([r.trop_corr_2w for r in self.ranges], dtype=np.float64)
        resid = tof - pre - trop
        if subtract_calibration:
            resid = resid - float(self.calibration_overall)
        return ResidualSeries(time=self.epochs_s, residual=resid)

    def data_indices(self) -> NDArray[np.intp]:
        """Indices of shots currently flagged as DATA."""
        return np.flatnonzero(self.flags == int(FilterFlag.DATA)).astype(np.intp)

    def with_flags(
        self,
        accepted: ArrayLike,
        *,
        mode: FilterMode = FilterMode.AUTO,
    ) -> TrackingSession:
        """Return a copy flagged DATA at ``accepted`` and NOISE everywhere else."""
        accepted_set = {int(i) for i in np.asarray(accepted, dtype=np.intp).reshape(-1)}
        ranges = tuple(
            replace(r, flag=FilterFlag.DATA if i in accepted_set else FilterFlag.NOISE)
            for i, r in enumerate(self.ranges)
        )
        return replace(self, ranges=ranges, filter_mode=mode)

    def with_predictions(self, predictor: TOFPredictor) -> tuple[TrackingSession, list[int]]:
        """Return a copy whose ``pre_2w`` values come from ``predictor``.

        Shots the predictor cannot cover keep their previous prediction; their
        indices are returned so the caller can decide what to do with them.
        """
        missing: list[int] = []
        ranges: list[RangeData] = []
        for i, (shot, epoch) in enumerate(zip(self.ranges, self.epochs_s)):
            day_offset = int(epoch // SECONDS_PER_DAY)
            seconds_of_day = float(epoch - day_offset * SECONDS_PER_DAY)
            prediction = predictor.predict(self.start_mjd + day_offset, seconds_of_day)
            if prediction is None:
                missing.append(i)
                ranges.append(shot)
            else:
                ranges.append(replace(shot, pre_2w=prediction.tof_ps))

        if missing:
            logger.warning(
                f"No ephemeris prediction for {len(missing)} of {len(self.ranges)} shots "
                f"of {self.object_name}; their previous predictions were kept"
            )
        return replace(self, ranges=tuple(ranges)), missing
