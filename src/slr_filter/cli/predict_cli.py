"""`slrf predict` command: two-way flight times from a CPF file."""

from __future__ import annotations

from pathlib import Path

import click

from slr_filter.cli.common_cli import (
    EXIT_DATA_UNAVAILABLE,
    EXIT_INPUT_ERROR,
    SlrCliError,
    dump_json_output,
    resolve_optional_output_path,
)
from slr_filter.ephemeris.predictor import CPFPredictor


@click.command("predict")
@click.argument("cpf_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--mjd", type=int, required=True, help="Modified Julian Date of the epochs.")
@click.option(
    "--sod",
    "seconds_of_day",
    type=float,
    multiple=True,
    required=True,
    help="Seconds of day. Repeatable.",
)
@click.option("--lat", type=float, default=None, help="Station geodetic latitude (deg).")
@click.option("--lon", type=float, default=None, help="Station geodetic longitude (deg).")
@click.option("--alt", type=float, default=None, help="Station height above the ellipsoid (m).")
@click.option(
    "--out",
    "output_path_arg",
    type=str,
    default="-",
    show_default=True,
    help="JSON output path or '-' for stdout.",
)
def predict_command(
    cpf_path: Path,
    mjd: int,
    seconds_of_day: tuple[float, ...],
    lat: float | None,
    lon: float | None,
    alt: float | None,
    output_path_arg: str,
) -> None:
    """Predict two-way flight times (ps) at MJD/SoD epochs from CPF_PATH."""
    station_args = (lat, lon, alt)
    if any(v is not None for v in station_args) and any(v is None for v in station_args):
        raise SlrCliError("Provide all of --lat, --lon and --alt, or none.", exit_code=EXIT_INPUT_ERROR)

    predictor = CPFPredictor()
    if lat is not None and lon is not None and alt is not None:
        predictor.set_station_coordinates(lat, lon, alt)

    if not predictor.load(cpf_path):
        raise SlrCliError(f"Cannot load CPF ephemeris: {cpf_path}", exit_code=EXIT_DATA_UNAVAILABLE)

    rows = []
    for sod in seconds_of_day:
        prediction = predictor.predict(mjd, sod)
        rows.append(
            {
                "mjd": mjd,
                "seconds_of_day": sod,
                "tof_ps": prediction.tof_ps if prediction is not None else None,
                "range_m": prediction.range_m if prediction is not None else None,
            }
        )

    ephemeris = predictor.ephemeris
    payload = {
        "schema_version": 1,
        "cpf": str(cpf_path),
        "target": ephemeris.header.target_name if ephemeris is not None else None,
        "station": predictor.station.model_dump(),
        "predictions": rows,
    }
    dump_json_output(payload, resolve_optional_output_path(output_path_arg))
