"""Tests for slr_filter.utils.units."""

from __future__ import annotations

import pytest

from slr_filter.utils.units import (
    CM_PER_PS,
    PS_PER_METRE,
    SPEED_OF_LIGHT_M_S,
    metres_to_ps,
    ps_to_cm,
    ps_to_metres,
    two_way_tof_ps,
)


def test_conversion_constants() -> None:
    assert PS_PER_METRE == pytest.approx(3335.640951982)
    assert CM_PER_PS == pytest.approx(0.0299792458)


def test_metres_round_trip() -> None:
    assert ps_to_metres(metres_to_ps(0.75)) == pytest.approx(0.75)


def test_ps_to_cm() -> None:
    assert ps_to_cm(100.0) == pytest.approx(2.99792458)


def test_two_way_tof() -> None:
    # One light-second of round trip.
    assert two_way_tof_ps(SPEED_OF_LIGHT_M_S / 2.0) == pytest.approx(1.0e12)
