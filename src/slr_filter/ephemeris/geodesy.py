"""Station coordinate conversions on the WGS84 ellipsoid."""

from __future__ import annotations

import math

from slr_filter.domain.ephemeris import StationPosition

WGS84_A = 6378137.0
WGS84_F = 1.0 / 298.257223563
WGS84_E2 = 2.0 * WGS84_F - WGS84_F**2

# San Fernando (Spain) laser ranging station.
DEFAULT_STATION_GEODETIC = (36.4624, -6.2062, 197.0)


def geodetic_to_geocentric(lat_deg: float, lon_deg: float, alt_m: float) -> tuple[float, float, float]:
    """Convert geodetic latitude/longitude (degrees) and height (m) to ECEF metres."""
    lat_rad = math.radians(lat_deg)
    lon_rad = math.radians(lon_deg)
    sin_lat = math.sin(lat_rad)
    n = WGS84_A / math.sqrt(1.0 - WGS84_E2 * sin_lat**2)
    x = (n + alt_m) * math.cos(lat_rad) * math.cos(lon_rad)
    y = (n + alt_m) * math.cos(lat_rad) * math.sin(lon_rad)
    z = (n * (1.0 - WGS84_E2) + alt_m) * sin_lat
    return (x, y, z)


def station_from_geodetic(lat_deg: float, lon_deg: float, alt_m: float) -> StationPosition:
    x, y, z = geodetic_to_geocentric(lat_deg, lon_deg, alt_m)
    return StationPosition(x=x, y=y, z=z)


def default_station() -> StationPosition:
    return station_from_geodetic(*DEFAULT_STATION_GEODETIC)
