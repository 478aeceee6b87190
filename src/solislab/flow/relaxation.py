from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numba as nb

if TYPE_CHECKING:
    import numpy.typing as npt


@nb.njit(cache=True, fastmath=True)
def _relax(
    initial: npt.NDArray[np.float64],
    grid: int,
    fixed: npt.NDArray[np.bool_],
    iterations: int,
    rate: float,
) -> npt.NDArray[np.float64]:
    """Jacobi sweeps of local averaging; fixed cells are copied unchanged."""
    current = initial.copy()
    buffer = np.empty_like(current)
    for _ in range(iterations):
        for y in range(grid):
            for x in range(grid):
                i = y * grid + x
                if fixed[i]:
                    buffer[i] = current[i]
                    continue
                s = 0.0
                count = 0
                if x > 0:
                    s += current[i - 1]
                    count += 1
                if x + 1 < grid:
                    s += current[i + 1]
                    count += 1
                if y > 0:
                    s += current[i - grid]
                    count += 1
                if y + 1 < grid:
                    s += current[i + grid]
                    count += 1
                avg = s / count if count > 0 else current[i]
                buffer[i] = current[i] + rate * (avg - current[i])
        current, buffer = buffer, current
    return current


def relax_field(
    field: npt.NDArray[np.float64],
    grid: int,
    fixed: npt.NDArray[np.bool_],
    iterations: int,
    rate: float,
) -> npt.NDArray[np.float64]:
    """
    Diffuse a field by iterative local averaging.

    Every free cell moves towards the mean of its up-to-4 axis neighbours by
    `rate`, all cells updated from the previous sweep.

    Args:
        field: Flat row-major field, left untouched.
        grid: Side length of the field.
        fixed: Boolean mask of cells that never change (the boundary ring).
        iterations: Number of sweeps.
        rate: Blend towards the neighbour mean, clamped to [0.01, 1].

    Returns:
        The relaxed field as a new array.
    """
    clamped_rate = max(0.01, min(1.0, rate))
    return _relax(
        np.ascontiguousarray(field, dtype=np.float64),
        grid,
        np.ascontiguousarray(fixed, dtype=np.bool_),
        int(iterations),
        float(clamped_rate),
    )
