"""Domain models for slr-filter.

This package is domain-only. File formats for tracking sessions are handled by
external readers; only the in-memory structures live here.
"""

from slr_filter.domain.ephemeris import EphemerisRecord, StationPosition, TOFPrediction
from slr_filter.domain.residuals import FilterFlag, ResidualSeries
from slr_filter.domain.tracking import (
    FilterMode,
    RangeData,
    TrackingSession,
    unwrap_start_times,
)

__all__ = [
    "EphemerisRecord",
    "FilterFlag",
    "FilterMode",
    "RangeData",
    "ResidualSeries",
    "StationPosition",
    "TOFPrediction",
    "TrackingSession",
    "unwrap_start_times",
]
