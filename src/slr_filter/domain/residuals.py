"""Residual series domain models.

This module provides:
- FilterFlag: Caller-owned classification of a ranging shot
- ResidualSeries: Internal representation of (epoch, residual) samples with numpy arrays
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


class FilterFlag(IntEnum):
    """Classification of a ranging shot, as stored with tracking sessions."""

    UNKNOWN = 0
    NOISE = 1
    DATA = 2


@dataclass(frozen=True)
class ResidualSeries:
    """Time-ordered (epoch, residual) samples.

    This is the working representation passed between filter stages. Stages
    return index arrays or new series; the arrays held here are read-only.

    Attributes:
        time: Epochs in seconds (float64). Seconds of day for a single pass,
            continuing past 86400 when the pass crosses midnight.
        residual: Observed minus predicted two-way flight time, in picoseconds
            (float64).
    """

    time: NDArray[np.float64]
    residual: NDArray[np.float64]

    def __post_init__(self) -> None:
        arrays: dict[str, np.ndarray[Any, Any]] = {"time": self.time, "residual": self.residual}
        for name, arr in arrays.items():
            if not isinstance(arr, np.ndarray):
                raise TypeError(f"{name} must be a numpy array, got {type(arr).__name__}")
            if arr.dtype != np.float64:
                raise ValueError(f"{name} must be float64, got {arr.dtype}")
            if arr.ndim != 1:
                raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")

        if len(self.residual) != len(self.time):
            raise ValueError(
                f"residual length {len(self.residual)} != time length {len(self.time)}"
            )

        # Make arrays read-only; stages must produce new series
        for arr in arrays.values():
            arr.flags.writeable = False

    @classmethod
    def from_arrays(cls, time: ArrayLike, residual: ArrayLike) -> ResidualSeries:
        """Build a series from any array-likes, copying into float64 arrays."""
        return cls(
            time=np.array(time, dtype=np.float64).reshape(-1),
            residual=np.array(residual, dtype=np.float64).reshape(-1),
        )

    def __len__(self) -> int:
        return len(self.time)

    @property
    def n_points(self) -> int:
        return len(self.time)

    @property
    def is_empty(self) -> bool:
        return len(self.time) == 0

    @property
    def duration_s(self) -> float:
        """Span of the series in seconds."""
        if self.is_empty:
            return 0.0
        return float(np.max(self.time) - np.min(self.time))

    def take(self, indices: ArrayLike) -> ResidualSeries:
        """Return a new series holding the samples at ``indices`` (in that order)."""
        idx = np.asarray(indices, dtype=np.intp).reshape(-1)
        return ResidualSeries(
            time=np.array(self.time[idx], dtype=np.float64),
            residual=np.array(self.residual[idx], dtype=np.float64),
        )
