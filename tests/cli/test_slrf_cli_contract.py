from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
from click.testing import CliRunner

from slr_filter.cli.common_cli import EXIT_DATA_UNAVAILABLE, EXIT_INPUT_ERROR
from slr_filter.cli.filter_cli import filter_command
from slr_filter.cli.main import cli
from slr_filter.cli.predict_cli import predict_command
from slr_filter.cli.smooth_cli import smooth_command


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SLR_FILTER_CONFIG", raising=False)


@pytest.fixture
def residual_file(tmp_path: Path, three_bin_pass) -> tuple[Path, np.ndarray]:
    t, r, cluster = three_bin_pass
    path = tmp_path / "pass.json"
    path.write_text(json.dumps({"time": t.tolist(), "residual": r.tolist()}), encoding="utf-8")
    return path, cluster


@pytest.fixture
def cpf_file(tmp_path: Path) -> Path:
    lines = ["H1 CPF  2  SGF 2024 01 05 10 0005 lageos1"]
    for k in range(12):
        sod = 60.0 * k
        lines.append(f"10 0 60314 {sod:12.5f} 0 {7.0e6 + 10.0 * sod:.3f} 1000000.000 -2000000.000")
    lines.append("99")
    path = tmp_path / "lageos1.cpf"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_slrf_filter_success_payload_contract(residual_file) -> None:
    path, cluster = residual_file
    runner = CliRunner()
    result = runner.invoke(
        filter_command,
        [str(path), "--bin-size", "30", "--depth", "50", "--min-photons", "5", "--post-depth", "100"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["schema_version"] == 1
    assert payload["config"]["depth_ps"] == 50.0
    assert payload["result"]["accepted"] == cluster.tolist()
    assert payload["result"]["stages"]["prefilter"] == cluster.tolist()
    assert payload["result"]["statistics"]["n"] == len(cluster)


def test_slrf_filter_writes_output_file(residual_file, tmp_path: Path) -> None:
    path, _ = residual_file
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"depth_ps": 50.0, "post_depth_ps": 100.0}), encoding="utf-8")
    out_path = tmp_path / "out" / "filtered.json"

    runner = CliRunner()
    result = runner.invoke(
        filter_command,
        [str(path), "--config", str(config_path), "--threshold", "--out", str(out_path)],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["config"]["apply_threshold_filter"] is True
    assert "threshold_passes" in payload["result"]


def test_slrf_filter_missing_keys_is_input_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"time": [1.0, 2.0]}), encoding="utf-8")

    result = CliRunner().invoke(filter_command, [str(path)])

    assert result.exit_code == EXIT_INPUT_ERROR
    assert "missing keys: residual" in result.output


def test_slrf_filter_length_mismatch_is_input_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"time": [1.0, 2.0], "residual": [1.0]}), encoding="utf-8")

    result = CliRunner().invoke(filter_command, [str(path)])

    assert result.exit_code == EXIT_INPUT_ERROR
    assert "Invalid residual file" in result.output


def test_slrf_filter_invalid_option_is_input_error(residual_file) -> None:
    path, _ = residual_file
    result = CliRunner().invoke(filter_command, [str(path), "--depth=-5"])
    assert result.exit_code == EXIT_INPUT_ERROR
    assert "Invalid pipeline option" in result.output


def test_slrf_predict_payload_contract(cpf_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        predict_command,
        [str(cpf_file), "--mjd", "60314", "--sod", "150", "--sod", "5000"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["target"] == "lageos1"
    covered, uncovered = payload["predictions"]
    assert covered["seconds_of_day"] == 150.0
    assert covered["tof_ps"] > 0.0
    assert uncovered["tof_ps"] is None
    assert uncovered["range_m"] is None


def test_slrf_predict_custom_station(cpf_file: Path) -> None:
    result = CliRunner().invoke(
        predict_command,
        [str(cpf_file), "--mjd", "60314", "--sod", "150", "--lat", "0", "--lon", "0", "--alt", "0"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["station"]["x"] == pytest.approx(6378137.0)


def test_slrf_predict_partial_station_is_input_error(cpf_file: Path) -> None:
    result = CliRunner().invoke(
        predict_command,
        [str(cpf_file), "--mjd", "60314", "--sod", "150", "--lat", "10"],
    )
    assert result.exit_code == EXIT_INPUT_ERROR


def test_slrf_predict_unreadable_cpf(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        predict_command,
        [str(tmp_path / "missing.cpf"), "--mjd", "60314", "--sod", "150"],
    )
    assert result.exit_code == EXIT_DATA_UNAVAILABLE
    assert "Cannot load CPF ephemeris" in result.output


@pytest.mark.parametrize("method", ["moving-average", "median", "exponential"])
def test_slrf_smooth_preserves_length(tmp_path: Path, method: str) -> None:
    path = tmp_path / "series.json"
    path.write_text(json.dumps({"time": [0.0, 1.0, 2.0, 3.0], "residual": [1.0, 5.0, 2.0, 8.0]}))

    result = CliRunner().invoke(smooth_command, [str(path), "--method", method, "--window", "3"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["method"] == method
    assert payload["time"] == [0.0, 1.0, 2.0, 3.0]
    assert len(payload["residual"]) == 4


def test_slrf_group_registers_commands() -> None:
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for name in ("filter", "predict", "smooth"):
        assert name in result.output


def test_slrf_group_verbose_flag(residual_file) -> None:
    path, _ = residual_file
    result = CliRunner().invoke(cli, ["-vv", "smooth", str(path)])
    assert result.exit_code == 0, result.output
