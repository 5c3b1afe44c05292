"""Tests for slr_filter.compute.prefilter."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from slr_filter.compute.prefilter import hist_prefilter, hist_prefilter_bin, window_prefilter


class TestWindowPrefilter:
    def test_closed_bounds(self) -> None:
        r = np.array([-2.0, -1.0, 0.0, 1.0, 2.0])
        assert_array_equal(window_prefilter(r, -1.0, 1.0), [1, 2, 3])

    def test_idempotent(self) -> None:
        rng = np.random.default_rng(5)
        r = rng.normal(0.0, 1000.0, 300)
        first = window_prefilter(r, -500.0, 800.0)
        again = window_prefilter(r[first], -500.0, 800.0)
        assert_array_equal(again, np.arange(len(first)))

    @pytest.mark.parametrize("lower,upper", [(1.0, 1.0), (2.0, 1.0)])
    def test_degenerate_window(self, lower: float, upper: float) -> None:
        assert len(window_prefilter([0.0, 1.0, 2.0], lower, upper)) == 0

    def test_empty(self) -> None:
        assert len(window_prefilter([], -1.0, 1.0)) == 0


class TestHistPrefilterBin:
    def test_selects_cluster(self, single_bin_pass) -> None:
        _, r, cluster = single_bin_pass
        selected = hist_prefilter_bin(r, 50.0, 5)
        assert set(cluster.tolist()) <= set(selected.tolist())
        assert len(set(selected.tolist()) - set(cluster.tolist())) <= 2

    def test_zero_min_photons_accepts_everything(self) -> None:
        rng = np.random.default_rng(2)
        r = rng.normal(0.0, 100.0, 50)
        assert_array_equal(hist_prefilter_bin(r, 10.0, 0), np.arange(50))

    def test_sparse_bin_yields_nothing(self) -> None:
        r = np.linspace(0.0, 1000.0, 11)
        assert len(hist_prefilter_bin(r, 100.0, 2)) == 0

    def test_expands_over_neighbouring_buckets(self) -> None:
        # Buckets of width 10 over [-100, 100): two adjacent dense buckets.
        r = np.concatenate([[-100.0, 100.0], np.full(6, 12.0), np.full(4, 25.0)])
        selected = hist_prefilter_bin(r, 10.0, 3)
        assert_array_equal(selected, np.arange(2, 12))

    def test_non_positive_depth(self) -> None:
        assert len(hist_prefilter_bin([1.0, 2.0], 0.0, 1)) == 0

    def test_non_finite_residuals(self) -> None:
        assert len(hist_prefilter_bin([1.0, np.inf, 2.0], 1.0, 1)) == 0

    @pytest.mark.parametrize("min_photons", [-1, float("nan")])
    def test_invalid_min_photons(self, min_photons: float) -> None:
        assert len(hist_prefilter_bin([1.0, 1.5, 2.0], 1.0, min_photons)) == 0


class TestHistPrefilter:
    def test_single_bin_scenario(self, single_bin_pass) -> None:
        t, r, cluster = single_bin_pass
        selected = hist_prefilter(t, r, 30.0, 50.0, 5)
        assert set(cluster.tolist()) <= set(selected.tolist())
        noise_selected = set(selected.tolist()) - set(cluster.tolist())
        assert len(noise_selected) <= 2

    def test_per_bin_indices_are_offset(self, three_bin_pass) -> None:
        t, r, cluster = three_bin_pass
        selected = hist_prefilter(t, r, 30.0, 50.0, 5)
        assert set(cluster.tolist()) <= set(selected.tolist())
        assert np.all(np.diff(selected) > 0)

    def test_divisions_scale_depth_and_min_photons(self, single_bin_pass) -> None:
        t, r, _ = single_bin_pass
        assert_array_equal(
            hist_prefilter(t, r, 30.0, 100.0, 10, divisions=2),
            hist_prefilter(t, r, 30.0, 50.0, 5, divisions=1),
        )

    @pytest.mark.parametrize(
        "bin_size,depth,min_photons,divisions",
        [
            (30.0, 50.0, 5, 0),
            (0.0, 50.0, 5, 1),
            (-30.0, 50.0, 5, 1),
            (30.0, 0.0, 5, 1),
            (30.0, -50.0, 5, 1),
            (30.0, 50.0, -1, 1),
            (30.0, 50.0, 5, float("nan")),
            (30.0, 50.0, 5, float("inf")),
            (30.0, 50.0, float("nan"), 1),
            (30.0, 50.0, float("inf"), 1),
            (float("nan"), 50.0, 5, 1),
            (30.0, float("nan"), 5, 1),
        ],
    )
    def test_invalid_parameters_give_empty(
        self, single_bin_pass, bin_size: float, depth: float, min_photons: int, divisions: int
    ) -> None:
        t, r, _ = single_bin_pass
        assert len(hist_prefilter(t, r, bin_size, depth, min_photons, divisions)) == 0

    def test_mismatched_lengths(self) -> None:
        assert len(hist_prefilter([0.0, 1.0], [0.0], 30.0, 50.0, 1)) == 0

    def test_empty(self) -> None:
        assert len(hist_prefilter([], [], 30.0, 50.0, 1)) == 0
