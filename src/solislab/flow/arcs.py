from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from solislab.analysis.boundary import boundary_ring
from solislab.analysis.entropy import shannon_entropy
from solislab.utils import as_field

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True, eq=False)
class BoundaryArc:
    """
    Contiguous run of ring positions.

    Attributes:
        start: Ring position of the first cell.
        end: Ring position of the last cell (wraps around the ring).
        indices: Flat field indices of the arc cells, in ring order.
        entropy: Shannon entropy of the arc values.
        center_x, center_y: Centroid of the arc cells.
    """
    start: int
    end: int
    indices: npt.NDArray[np.int64]
    entropy: float
    center_x: float
    center_y: float

    @property
    def length(self) -> int:
        return int(self.indices.size)


def sample_boundary_entropy(
    field: npt.ArrayLike,
    grid: int,
    arc_length: Optional[int] = None,
) -> List[BoundaryArc]:
    """
    Split the boundary ring into overlapping arcs, highest entropy first.

    Args:
        field: Flat row-major field.
        grid: Side length of the field.
        arc_length: Cells per arc. Defaults to a twelfth of the ring; always
            within [3, ring length].

    Returns:
        Arcs starting every arc_length // 2 positions, wrapping around the
        ring, sorted by descending entropy. Empty for grid <= 1.
    """
    ring = boundary_ring(grid)
    count = len(ring)
    if count == 0:
        return []
    values = as_field(field, grid)

    default_arc = count // 12 or 3
    effective = min(count, max(3, arc_length if arc_length is not None else default_arc))
    stride = max(1, effective // 2)

    arcs: List[BoundaryArc] = []
    for start in range(0, count, stride):
        points = [ring[(start + j) % count] for j in range(effective)]
        indices = np.array([p.index for p in points], dtype=np.int64)
        arcs.append(BoundaryArc(
            start=start,
            end=(start + effective - 1) % count,
            indices=indices,
            entropy=shannon_entropy(values[indices]),
            center_x=sum(p.x for p in points) / effective,
            center_y=sum(p.y for p in points) / effective,
        ))

    return sorted(arcs, key=lambda arc: arc.entropy, reverse=True)
