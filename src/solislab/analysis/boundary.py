"""
Boundary Ring Geometry
======================
Index bookkeeping for the outermost ring of a square field.

The ring is traversed clockwise starting at the top-left cell:
top row left to right, right column top to bottom (without corners),
bottom row right to left, left column bottom to top (without corners).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class BoundaryPoint:
    """One ring cell: flat field index and its (x, y) position."""
    index: int
    x: int
    y: int


def boundary_ring(grid: int) -> List[BoundaryPoint]:
    """
    Ordered ring cells of a grid x grid field.

    Args:
        grid: Side length of the field.

    Returns:
        4 * grid - 4 points for grid > 1, an empty list otherwise.
    """
    if grid <= 1:
        return []
    limit = grid - 1
    points: List[BoundaryPoint] = []

    def push(x: int, y: int) -> None:
        points.append(BoundaryPoint(index=y * grid + x, x=x, y=y))

    for x in range(0, limit + 1):
        push(x, 0)
    for y in range(1, limit):
        push(limit, y)
    for x in range(limit, -1, -1):
        push(x, limit)
    for y in range(limit - 1, 0, -1):
        push(0, y)
    return points


def boundary_indices(grid: int) -> npt.NDArray[np.int64]:
    """Flat field indices of the ring, in traversal order."""
    return np.array([p.index for p in boundary_ring(grid)], dtype=np.int64)


def boundary_mask(grid: int) -> npt.NDArray[np.bool_]:
    """
    Boolean mask of ring cells over the flat field.

    For grid <= 1 every cell counts as boundary.
    """
    total = max(0, grid) ** 2
    if grid <= 1:
        return np.ones(total, dtype=np.bool_)
    mask = np.zeros((grid, grid), dtype=np.bool_)
    mask[0, :] = True
    mask[-1, :] = True
    mask[:, 0] = True
    mask[:, -1] = True
    return mask.ravel()


def interior_mask(grid: int) -> npt.NDArray[np.bool_]:
    """Complement of boundary_mask: strictly interior cells."""
    return ~boundary_mask(grid)
