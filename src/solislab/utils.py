from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from solislab.config import FIELD_VALUE_LIMIT

if TYPE_CHECKING:
    import numpy.typing as npt


def clamp01(value: float) -> float:
    """Clamp a scalar to [0, 1]."""
    if value <= 0.0:
        return 0.0
    if value >= 1.0:
        return 1.0
    return float(value)


def as_field(values: npt.ArrayLike, grid: int | None = None) -> npt.NDArray[np.float64]:
    """
    Copy an array-like field into a flat float64 array.

    Args:
        values: Any sequence of numbers (list, array, ...).
        grid: If given, the result is truncated or zero-padded to grid * grid.

    Returns:
        A new flat float64 array, never a view of the input.
    """
    arr = np.array(values, dtype=np.float64).ravel()
    if grid is None:
        return arr
    total = grid * grid
    if arr.size == total:
        return arr
    out = np.zeros(total, dtype=np.float64)
    n = min(total, arr.size)
    out[:n] = arr[:n]
    return out


def sanitize_field(values: npt.ArrayLike, grid: int) -> npt.NDArray[np.float64]:
    """Field copy with non-finite samples zeroed and magnitudes clamped."""
    arr = as_field(values, grid)
    arr[~np.isfinite(arr)] = 0.0
    np.clip(arr, -FIELD_VALUE_LIMIT, FIELD_VALUE_LIMIT, out=arr)
    return arr
