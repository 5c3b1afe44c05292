"""Ephemeris prediction API facade (host-facing).

Exposes the CPF reader and the two-way time-of-flight predictor used to
recompute residuals against a different orbit model.

Delegates to `slr_filter.ephemeris`.
"""

from __future__ import annotations

from slr_filter.domain.ephemeris import (  # noqa: F401
    EphemerisRecord,
    StationPosition,
    TOFPrediction,
)
from slr_filter.ephemeris.cpf import CPFEphemeris, CPFHeader, parse_cpf  # noqa: F401
from slr_filter.ephemeris.geodesy import (  # noqa: F401
    default_station,
    geodetic_to_geocentric,
    station_from_geodetic,
)
from slr_filter.ephemeris.predictor import INVALID_TOF, CPFPredictor  # noqa: F401

__all__ = [
    "CPFEphemeris",
    "CPFHeader",
    "CPFPredictor",
    "EphemerisRecord",
    "INVALID_TOF",
    "StationPosition",
    "TOFPrediction",
    "default_station",
    "geodetic_to_geocentric",
    "parse_cpf",
    "station_from_geodetic",
]
