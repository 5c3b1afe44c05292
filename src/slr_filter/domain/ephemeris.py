"""Ephemeris and station domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass

from slr_filter.domain.base import FrozenModel


@dataclass(frozen=True, order=True)
class EphemerisRecord:
    """One CPF position sample.

    Ordering compares (mjd, seconds_of_day) first, so a sorted list of records
    is chronological.

    Attributes:
        mjd: Modified Julian Day of the sample.
        seconds_of_day: Seconds since midnight of ``mjd``.
        position: Geocentric (x, y, z) in metres.
    """

    mjd: int
    seconds_of_day: float
    position: tuple[float, float, float]

    def seconds_since(self, reference_mjd: int) -> float:
        """Seconds elapsed from midnight of ``reference_mjd`` to this record."""
        return (self.mjd - reference_mjd) * 86400.0 + self.seconds_of_day


class StationPosition(FrozenModel):
    """Fixed geocentric station coordinates in metres."""

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def distance_to(self, position: tuple[float, float, float]) -> float:
        return math.dist(self.as_tuple(), position)


class TOFPrediction(FrozenModel):
    """Predicted two-way flight time at one epoch.

    Attributes:
        mjd: Query day.
        seconds_of_day: Query second of day.
        position: Interpolated satellite position (metres).
        range_m: One-way station to satellite distance (metres).
        tof_ps: Two-way time of flight (picoseconds).
    """

    mjd: int
    seconds_of_day: float
    position: tuple[float, float, float]
    range_m: float
    tof_ps: float
