from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from solislab.analysis.boundary import boundary_indices

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True, eq=False)
class BoundarySample:
    """
    A field paired with its boundary ring.

    Attributes:
        boundary: Ring values in clockwise order from (0, 0), length 4 * grid - 4.
        bulk: Copy of the full field, length grid * grid.
        grid: Side length of the field.
    """
    boundary: npt.NDArray[np.float64]
    bulk: npt.NDArray[np.float64]
    grid: int

    @property
    def boundary_size(self) -> int:
        return int(self.boundary.size)

    @property
    def bulk_size(self) -> int:
        return int(self.bulk.size)


def capture_sample(field: npt.ArrayLike, grid: int) -> BoundarySample:
    """
    Read the boundary ring of a square field.

    Args:
        field: Flat row-major field.
        grid: Side length of the field.

    Raises:
        ValueError: If grid <= 1 or the field does not hold grid * grid values.

    Returns:
        Immutable sample with independent copies of the ring and the field.
    """
    if grid <= 1:
        raise ValueError(f"Grid must be greater than 1, got {grid}.")
    values = np.array(field, dtype=np.float64).ravel()
    if values.size != grid * grid:
        raise ValueError(
            f"Field length {values.size} does not match grid size {grid}x{grid} ({grid * grid})."
        )

    boundary = values[boundary_indices(grid)]
    boundary.setflags(write=False)
    values.setflags(write=False)
    return BoundarySample(boundary=boundary, bulk=values, grid=grid)
