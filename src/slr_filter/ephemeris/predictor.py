"""Two-way time-of-flight prediction from a CPF ephemeris.

The predictor interpolates the satellite position at the requested epoch with
an 8-point Lagrange window over the CPF position table, measures the distance
to a fixed station and converts it to a two-way flight time in picoseconds.

Epochs are placed on a single continuous axis (seconds since midnight of the
first record's day), so queries between records on different days, including
across midnight, are interpolated like any other.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from slr_filter.domain.ephemeris import EphemerisRecord, StationPosition, TOFPrediction
from slr_filter.ephemeris.cpf import CPFEphemeris, CPFHeader, parse_cpf
from slr_filter.ephemeris.geodesy import default_station, station_from_geodetic
from slr_filter.ephemeris.lagrange import WINDOW_SIZE, lagrange_interpolate
from slr_filter.errors import EphemerisLoadError
from slr_filter.utils.units import SECONDS_PER_DAY, two_way_tof_ps

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# Returned by calculate_two_way_tof when no prediction is available.
INVALID_TOF = 0.0

# Nodes taken before the bracketing record when centring the window.
WINDOW_LEAD = 3


class CPFPredictor:
    """Predict two-way flight times from a loaded CPF ephemeris.

    The predictor starts unloaded; ``predict`` returns None and
    ``calculate_two_way_tof`` returns ``INVALID_TOF`` until ``load`` (or
    ``load_records``) succeeds. Once loaded, queries are read-only and
    idempotent.

    Example:
        >>> predictor = CPFPredictor()
        >>> if predictor.load("lageos1_cpf_240105_5051.sgf"):
        ...     tof_ps = predictor.calculate_two_way_tof(60314, 43200.0)
    """

    def __init__(self, station: StationPosition | None = None) -> None:
        self._station = station if station is not None else default_station()
        self._ephemeris: CPFEphemeris | None = None
        self._reference_mjd = 0
        self._epochs: NDArray[np.float64] = np.array([], dtype=np.float64)
        self._positions: NDArray[np.float64] = np.empty((0, 3), dtype=np.float64)

    @property
    def station(self) -> StationPosition:
        return self._station

    @property
    def ephemeris(self) -> CPFEphemeris | None:
        return self._ephemeris

    @property
    def is_loaded(self) -> bool:
        return self._ephemeris is not None

    def set_station_position(self, station: StationPosition) -> None:
        self._station = station

    def set_station_coordinates(self, lat_deg: float, lon_deg: float, alt_m: float) -> None:
        """Set the station from WGS84 geodetic coordinates."""
        self._station = station_from_geodetic(lat_deg, lon_deg, alt_m)

    def load(self, path: str | Path) -> bool:
        """Load a CPF file, replacing any previously loaded table.

        Returns:
            True on success. False when the file cannot be read or parsed or
            holds no position records; the predictor is then unloaded.
        """
        try:
            ephemeris = parse_cpf(path)
        except EphemerisLoadError as exc:
            logger.warning(f"CPF load failed: {exc}")
            self._reset()
            return False
        return self._install(ephemeris)

    def load_records(
        self,
        records: Sequence[EphemerisRecord],
        header: CPFHeader | None = None,
    ) -> bool:
        """Load an in-memory position table (sorted and de-duplicated here)."""
        unique = {(r.mjd, r.seconds_of_day): r for r in records}
        if not unique:
            logger.warning("Ephemeris table is empty")
            self._reset()
            return False
        ephemeris = CPFEphemeris(header=header or CPFHeader(), records=tuple(sorted(unique.values())))
        return self._install(ephemeris)

    def _reset(self) -> None:
        self._ephemeris = None
        self._reference_mjd = 0
        self._epochs = np.array([], dtype=np.float64)
        self._positions = np.empty((0, 3), dtype=np.float64)

    def _install(self, ephemeris: CPFEphemeris) -> bool:
        records = ephemeris.records
        self._reference_mjd = records[0].mjd
        self._epochs = np.array([r.seconds_since(self._reference_mjd) for r in records], dtype=np.float64)
        self._positions = np.array([r.position for r in records], dtype=np.float64)
        self._ephemeris = ephemeris
        if len(records) < WINDOW_SIZE:
            logger.warning(
                f"Ephemeris has {len(records)} records, fewer than the {WINDOW_SIZE} "
                "needed for interpolation; every query will fail"
            )
        logger.info(
            f"Loaded {len(records)} ephemeris records"
            + (f" for {ephemeris.header.target_name}" if ephemeris.header.target_name else "")
        )
        return True

    def _window_start(self, target: float) -> int | None:
        """First node of the interpolation window for ``target``, or None if uncovered.

        The bracketing pair ``(i, i+1)`` satisfies ``t_i <= target < t_{i+1}``.
        The window starts 3 nodes before ``i`` (clamped to 0) and must fit
        entirely inside the table.
        """
        n = len(self._epochs)
        i = int(np.searchsorted(self._epochs, target, side="right")) - 1
        if i < 0 or i + 1 >= n:
            return None
        start = max(0, i - WINDOW_LEAD)
        if start + WINDOW_SIZE > n:
            return None
        return start

    def predict(self, mjd: int, seconds_of_day: float) -> TOFPrediction | None:
        """Predict the two-way flight time at ``(mjd, seconds_of_day)``.

        Returns:
            The prediction, or None when the predictor is unloaded or the
            epoch is not covered by a full interpolation window.
        """
        if not self.is_loaded:
            return None

        target = (int(mjd) - self._reference_mjd) * SECONDS_PER_DAY + float(seconds_of_day)
        start = self._window_start(target)
        if start is None:
            logger.debug(f"No ephemeris coverage for MJD {mjd} SoD {seconds_of_day}")
            return None

        window = slice(start, start + WINDOW_SIZE)
        # Nodes relative to the target keep the products well scaled.
        position = lagrange_interpolate(self._epochs[window] - target, self._positions[window], 0.0)
        pos = (float(position[0]), float(position[1]), float(position[2]))
        range_m = self._station.distance_to(pos)
        return TOFPrediction(
            mjd=int(mjd),
            seconds_of_day=float(seconds_of_day),
            position=pos,
            range_m=range_m,
            tof_ps=two_way_tof_ps(range_m),
        )

    def calculate_two_way_tof(self, mjd: int, seconds_of_day: float) -> float:
        """Two-way flight time in picoseconds, or ``INVALID_TOF`` (0.0) if unavailable.

        Callers must treat 0.0 as "no prediction", never as a zero range.
        Prefer ``predict`` in new code.
        """
        prediction = self.predict(mjd, seconds_of_day)
        if prediction is None:
            return INVALID_TOF
        return prediction.tof_ps
