"""Tests for slr_filter.compute.polyfit."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_allclose

from slr_filter.compute.polyfit import (
    PolynomialFit,
    binned_fit_errors,
    detrend,
    evaluate,
    polynomial_fit,
)


@pytest.fixture
def epochs() -> np.ndarray:
    """Epochs late in the day, where raw powers of t would overflow a fit."""
    return 50000.0 + np.linspace(0.0, 100.0, 50)


class TestPolynomialFit:
    def test_recovers_cubic(self, epochs: np.ndarray) -> None:
        u = epochs - 50050.0
        y = 3.0 + 0.5 * u - 0.02 * u**2 + 1.0e-4 * u**3
        fit = polynomial_fit(epochs, y, degree=3)
        assert fit is not None
        assert fit.degree == 3
        assert_allclose(evaluate(fit, epochs), y, rtol=0.0, atol=1e-6)

    def test_default_degree_nine_on_smooth_data(self, epochs: np.ndarray) -> None:
        y = 100.0 * np.sin((epochs - 50000.0) / 30.0)
        fit = polynomial_fit(epochs, y)
        assert fit is not None
        assert fit.degree == 9
        assert np.max(np.abs(evaluate(fit, epochs) - y)) < 1.0

    def test_degree_clamped_to_distinct_points(self) -> None:
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([1.0, 4.0, 9.0])
        fit = polynomial_fit(x, y, degree=9)
        assert fit is not None
        assert fit.degree == 2
        assert_allclose(fit(x), y, atol=1e-9)

    def test_single_abscissa_gives_constant(self) -> None:
        fit = polynomial_fit([5.0, 5.0, 5.0], [1.0, 2.0, 3.0])
        assert fit is not None
        assert fit.degree == 0
        assert_allclose(evaluate(fit, [0.0, 5.0, 10.0]), 2.0)

    def test_non_finite_samples_ignored(self) -> None:
        fit = polynomial_fit([0.0, 1.0, 2.0, 3.0], [0.0, np.nan, 2.0, 3.0], degree=1)
        assert fit is not None
        assert_allclose(fit([1.0]), [1.0], atol=1e-9)

    @pytest.mark.parametrize(
        "x,y,degree",
        [([], [], 2), ([1.0, 2.0], [1.0], 1), ([1.0, 2.0], [1.0, 2.0], -1), ([np.nan], [1.0], 0)],
    )
    def test_invalid_input_returns_none(self, x, y, degree) -> None:
        assert polynomial_fit(x, y, degree) is None

    def test_evaluate_is_pure(self) -> None:
        fit = PolynomialFit(coefficients=(1.0, 2.0), domain=(-1.0, 1.0))
        x = np.array([0.0, 0.5])
        assert_allclose(evaluate(fit, x), [1.0, 2.0])
        assert_allclose(evaluate(fit, x), [1.0, 2.0])
        assert_allclose(x, [0.0, 0.5])


class TestDetrend:
    def test_removes_linear_trend(self, epochs: np.ndarray) -> None:
        y = 2.0 * (epochs - 50000.0) + 5.0
        assert_allclose(detrend(epochs, y, degree=1), 0.0, atol=1e-6)

    def test_trend_from_subset(self, epochs: np.ndarray) -> None:
        y = 2.0 * (epochs - 50000.0) + 5.0
        y_with_noise = y.copy()
        y_with_noise[::10] += 1000.0
        clean = np.ones(len(y), dtype=bool)
        clean[::10] = False

        out = detrend(
            epochs,
            y_with_noise,
            degree=1,
            fit_times=epochs[clean],
            fit_residuals=y_with_noise[clean],
        )
        assert_allclose(out[clean], 0.0, atol=1e-6)
        assert_allclose(out[~clean], 1000.0, atol=1e-6)

    def test_unfittable_returns_copy(self) -> None:
        r = np.array([1.0, 2.0])
        out = detrend([], [], fit_times=[], fit_residuals=[])
        assert len(out) == 0
        out = detrend([0.0, 1.0], r, degree=-1)
        assert_allclose(out, r)
        assert out is not r


class TestBinnedFitErrors:
    def test_smooth_series_has_small_errors(self) -> None:
        t = np.linspace(0.0, 119.0, 120)
        r = 0.05 * t**2 + 3.0 * t
        errors = binned_fit_errors(t, r, 30.0)
        assert errors.shape == r.shape
        assert np.max(np.abs(errors)) < 1e-4

    def test_outlier_identified_in_original_order(self) -> None:
        rng = np.random.default_rng(9)
        t = np.linspace(0.0, 29.0, 30)
        r = 0.1 * t**2
        r[12] += 1000.0
        perm = rng.permutation(len(t))

        errors = binned_fit_errors(t[perm], r[perm], 60.0, degree=2)

        outlier_position = int(np.flatnonzero(perm == 12)[0])
        assert int(np.argmax(errors)) == outlier_position

    def test_window_opens_after_bin_size(self) -> None:
        # Two separate constant segments; each window fits its own level.
        t = np.array([0.0, 1.0, 2.0, 100.0, 101.0, 102.0])
        r = np.array([10.0, 10.0, 10.0, -50.0, -50.0, -50.0])
        assert_allclose(binned_fit_errors(t, r, 30.0, degree=0), 0.0, atol=1e-9)

    def test_invalid_input(self) -> None:
        assert len(binned_fit_errors([], [], 30.0)) == 0
        assert len(binned_fit_errors([0.0], [0.0, 1.0], 30.0)) == 0
        assert len(binned_fit_errors([0.0], [1.0], 0.0)) == 0
