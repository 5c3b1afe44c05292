"""Tests for slr_filter.domain.tracking."""

from __future__ import annotations

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from slr_filter.domain.ephemeris import TOFPrediction
from slr_filter.domain.residuals import FilterFlag
from slr_filter.domain.tracking import (
    FilterMode,
    RangeData,
    TrackingSession,
    unwrap_start_times,
)


@pytest.fixture
def session() -> TrackingSession:
    ranges = (
        RangeData(start_time=86390.0, tof_2w=1000.0, pre_2w=900.0, trop_corr_2w=10.0),
        RangeData(start_time=86395.0, tof_2w=1100.0, pre_2w=1000.0, trop_corr_2w=20.0),
        RangeData(start_time=2.0, tof_2w=1200.0, pre_2w=1100.0, trop_corr_2w=30.0),
        RangeData(start_time=5.0, tof_2w=1300.0, pre_2w=1200.0, trop_corr_2w=40.0),
    )
    return TrackingSession(
        object_name="lageos1",
        start_mjd=60000,
        ranges=ranges,
        calibration_overall=5.0,
    )


class TestUnwrapStartTimes:
    def test_midnight_rollover(self) -> None:
        assert_allclose(
            unwrap_start_times([86390.0, 86395.0, 2.0, 5.0]),
            [86390.0, 86395.0, 86402.0, 86405.0],
        )

    def test_monotonic_unchanged(self) -> None:
        assert_allclose(unwrap_start_times([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])

    def test_short_input(self) -> None:
        assert_allclose(unwrap_start_times([7.0]), [7.0])


class TestTrackingSession:
    def test_residuals(self, session: TrackingSession) -> None:
        series = session.residuals()
        assert_allclose(series.residual, [85.0, 75.0, 65.0, 55.0])
        assert_allclose(series.time, [86390.0, 86395.0, 86402.0, 86405.0])

    def test_residuals_without_calibration(self, session: TrackingSession) -> None:
        assert_allclose(session.residuals(subtract_calibration=False).residual, [90.0, 80.0, 70.0, 60.0])

    def test_with_flags_returns_new_session(self, session: TrackingSession) -> None:
        flagged = session.with_flags([0, 2])
        assert_array_equal(flagged.flags, [2, 1, 2, 1])
        assert_array_equal(flagged.data_indices(), [0, 2])
        assert flagged.filter_mode is FilterMode.AUTO
        assert all(r.flag is FilterFlag.UNKNOWN for r in session.ranges)
        assert session.filter_mode is FilterMode.RAW

    def test_with_predictions(self, session: TrackingSession, caplog: pytest.LogCaptureFixture) -> None:
        queries: list[tuple[int, float]] = []

        class _Predictor:
            def predict(self, mjd: int, seconds_of_day: float) -> TOFPrediction | None:
                queries.append((mjd, seconds_of_day))
                if seconds_of_day == 86395.0:
                    return None
                return TOFPrediction(
                    mjd=mjd,
                    seconds_of_day=seconds_of_day,
                    position=(0.0, 0.0, 0.0),
                    range_m=1.0,
                    tof_ps=950.0,
                )

        with caplog.at_level(logging.WARNING):
            updated, missing = session.with_predictions(_Predictor())

        assert queries == [(60000, 86390.0), (60000, 86395.0), (60001, 2.0), (60001, 5.0)]
        assert missing == [1]
        assert [r.pre_2w for r in updated.ranges] == [950.0, 1000.0, 950.0, 950.0]
        assert session.ranges[0].pre_2w == 900.0
        assert "No ephemeris prediction for 1 of 4 shots" in caplog.text

    def test_len(self, session: TrackingSession) -> None:
        assert len(session) == 4
        assert len(TrackingSession(object_name="empty", start_mjd=60000)) == 0
        assert np.asarray(TrackingSession(object_name="empty", start_mjd=60000).epochs_s).size == 0
