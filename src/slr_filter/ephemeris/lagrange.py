"""Lagrange polynomial interpolation over a small node window."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

WINDOW_SIZE = 8


def lagrange_weights(nodes: ArrayLike, target: float) -> NDArray[np.float64]:
    """Basis weights ``L_i(target) = Π_{j≠i} (target - t_j) / (t_i - t_j)``.

    Raises:
        ValueError: If the nodes are not distinct.
    """
    t = np.asarray(nodes, dtype=np.float64).reshape(-1)
    if len(np.unique(t)) != len(t):
        raise ValueError("Lagrange nodes must be distinct")

    diffs = t[:, None] - t[None, :]
    np.fill_diagonal(diffs, 1.0)
    numer = np.tile(target - t, (len(t), 1))
    np.fill_diagonal(numer, 1.0)
    return np.prod(numer, axis=1) / np.prod(diffs, axis=1)


def lagrange_interpolate(nodes: ArrayLike, values: ArrayLike, target: float) -> NDArray[np.float64]:
    """Interpolate ``values`` sampled at ``nodes`` to ``target``.

    ``values`` may be 1-D (one component) or 2-D with one row per node, in
    which case every column is interpolated independently.
    """
    v = np.asarray(values, dtype=np.float64)
    weights = lagrange_weights(nodes, float(target))
    if v.shape[0] != len(weights):
        raise ValueError(f"values has {v.shape[0]} rows for {len(weights)} nodes")
    return np.asarray(weights @ v, dtype=np.float64)
