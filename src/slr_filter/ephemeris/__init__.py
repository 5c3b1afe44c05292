"""CPF ephemeris reading and two-way flight time prediction."""

from slr_filter.ephemeris.cpf import CPFEphemeris, CPFHeader, parse_cpf, parse_cpf_lines
from slr_filter.ephemeris.geodesy import (
    default_station,
    geodetic_to_geocentric,
    station_from_geodetic,
)
from slr_filter.ephemeris.lagrange import lagrange_interpolate, lagrange_weights
from slr_filter.ephemeris.predictor import INVALID_TOF, CPFPredictor

__all__ = [
    "CPFEphemeris",
    "CPFHeader",
    "CPFPredictor",
    "INVALID_TOF",
    "default_station",
    "geodetic_to_geocentric",
    "lagrange_interpolate",
    "lagrange_weights",
    "parse_cpf",
    "parse_cpf_lines",
    "station_from_geodetic",
]
