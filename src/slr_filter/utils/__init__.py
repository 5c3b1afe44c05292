"""Shared utilities for slr-filter."""

from slr_filter.utils.units import (
    CM_PER_PS,
    PS_PER_METRE,
    SECONDS_PER_DAY,
    SPEED_OF_LIGHT_M_S,
    metres_to_ps,
    ps_to_cm,
    ps_to_metres,
    two_way_tof_ps,
)

__all__ = [
    "CM_PER_PS",
    "PS_PER_METRE",
    "SECONDS_PER_DAY",
    "SPEED_OF_LIGHT_M_S",
    "metres_to_ps",
    "ps_to_cm",
    "ps_to_metres",
    "two_way_tof_ps",
]
