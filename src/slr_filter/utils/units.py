"""Unit conversions between flight time and distance.

Flight times and residuals are carried in picoseconds throughout the package.
Operators usually think about filter depths in metres, so the conversions here
map between the two using the speed of light in vacuum.
"""

from __future__ import annotations

SPEED_OF_LIGHT_M_S = 299_792_458.0

# Picoseconds of flight time per metre of one-way path.
PS_PER_METRE = 1.0e12 / SPEED_OF_LIGHT_M_S  # 3335.640951982...

# Centimetres travelled per picosecond.
CM_PER_PS = SPEED_OF_LIGHT_M_S * 100.0 / 1.0e12  # 0.0299792458

SECONDS_PER_DAY = 86400.0
PS_PER_SECOND = 1.0e12


def metres_to_ps(metres: float) -> float:
    """Convert a distance in metres to picoseconds of flight time."""
    return float(metres) * PS_PER_METRE


def ps_to_metres(picoseconds: float) -> float:
    """Convert picoseconds of flight time to metres."""
    return float(picoseconds) / PS_PER_METRE


def ps_to_cm(picoseconds: float) -> float:
    return float(picoseconds) * CM_PER_PS


def two_way_tof_ps(range_m: float) -> float:
    """Two-way time of flight in picoseconds for a one-way range in metres."""
    return 2.0 * float(range_m) / SPEED_OF_LIGHT_M_S * PS_PER_SECOND
