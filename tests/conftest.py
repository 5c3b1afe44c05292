"""Shared synthetic passes for filter tests.

A pass is built from time bins of 100 shots each: 90 background photons spread
evenly over a ±50 ns range gate and 10 satellite returns clustered within
±20 ps of a +5000 ps offset.
"""

from __future__ import annotations

import numpy as np
import pytest

SHOTS_PER_BIN = 100
NOISE_PER_BIN = 90
CLUSTER_CENTRE_PS = 5000.0
BIN_SIZE_S = 30.0


def _bin_residuals(rng: np.random.Generator) -> np.ndarray:
    noise = np.linspace(-49975.0, 50025.0, NOISE_PER_BIN)
    cluster = CLUSTER_CENTRE_PS + rng.uniform(-20.0, 20.0, SHOTS_PER_BIN - NOISE_PER_BIN)
    return np.concatenate([noise, cluster])


def build_pass(n_bins: int, seed: int = 42) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    times = []
    residuals = []
    for k in range(n_bins):
        times.append(k * BIN_SIZE_S + np.linspace(0.0, BIN_SIZE_S - 1.0, SHOTS_PER_BIN))
        residuals.append(_bin_residuals(rng))
    cluster_idx = np.concatenate(
        [np.arange(NOISE_PER_BIN, SHOTS_PER_BIN) + k * SHOTS_PER_BIN for k in range(n_bins)]
    )
    return np.concatenate(times), np.concatenate(residuals), cluster_idx.astype(np.intp)


@pytest.fixture
def single_bin_pass() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """(times, residuals, cluster indices) for one 30 s bin."""
    return build_pass(1)


@pytest.fixture
def three_bin_pass() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """(times, residuals, cluster indices) for three consecutive 30 s bins."""
    return build_pass(3)
