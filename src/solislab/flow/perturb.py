"""
Entropy-Flow Estimation
=======================
Perturbs one boundary arc at a time, lets the perturbation diffuse into the
interior and measures the direction of the interior response.

For each arc the result reports a flow vector (displacement-weighted offset
of the interior cells towards the arc centroid) and its alignment with the
radial direction from the field centre to the arc.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional
import logging

import numpy as np

from solislab.analysis.boundary import boundary_mask
from solislab.config import DEFAULT_DELTA, DEFAULT_DIFFUSION, DEFAULT_ITERATIONS, EPS, FIELD_VALUE_LIMIT
from solislab.flow.arcs import BoundaryArc, sample_boundary_entropy
from solislab.flow.relaxation import relax_field
from solislab.utils import sanitize_field

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntropyForceOptions:
    arc_length: Optional[int] = None
    delta: float = DEFAULT_DELTA
    iterations: int = DEFAULT_ITERATIONS
    diffusion_rate: float = DEFAULT_DIFFUSION


@dataclass(frozen=True)
class FlowVector:
    x: float
    y: float
    magnitude: float
    alignment: float


@dataclass(frozen=True, eq=False)
class EntropyForceResult:
    arc: BoundaryArc
    flow: FlowVector
    total_delta: float


def arc_jitter(indices: npt.NDArray[np.int64]) -> npt.NDArray[np.float64]:
    """
    Deterministic pseudo-random values in [-1, 1) for the cells of an arc.

    Sine hash of the field index and the position within the arc.
    """
    positions = np.arange(1, indices.size + 1, dtype=np.float64)
    seed = np.sin((indices.astype(np.float64) + 1.0) * 12.9898 + positions * 78.233)
    return (seed - np.floor(seed)) * 2.0 - 1.0


def perturb_arc(
    base: npt.NDArray[np.float64],
    arc: BoundaryArc,
    delta: float,
) -> npt.NDArray[np.float64]:
    """Copy of base with the arc cells shifted by delta * jitter."""
    perturbed = base.copy()
    shifted = perturbed[arc.indices] + delta * arc_jitter(arc.indices)
    shifted[~np.isfinite(shifted)] = 0.0
    perturbed[arc.indices] = np.clip(shifted, -FIELD_VALUE_LIMIT, FIELD_VALUE_LIMIT)
    return perturbed


def compute_flow_vector(
    baseline: npt.NDArray[np.float64],
    perturbed: npt.NDArray[np.float64],
    grid: int,
    arc: BoundaryArc,
) -> tuple[FlowVector, float]:
    """
    Net interior response to an arc perturbation.

    Args:
        baseline: Relaxed unperturbed field.
        perturbed: Relaxed perturbed field.
        grid: Side length of the field.
        arc: The perturbed arc.

    Returns:
        The flow vector and the total absolute interior displacement.
    """
    base2d = baseline.reshape(grid, grid)[1:-1, 1:-1]
    pert2d = perturbed.reshape(grid, grid)[1:-1, 1:-1]
    diff = pert2d - base2d
    moved = np.isfinite(diff) & (np.abs(diff) > EPS)

    ys, xs = np.nonzero(moved)
    d = diff[moved]
    # interior cell (i, j) of the cropped view sits at (j + 1, i + 1)
    dx = arc.center_x - (xs + 1)
    dy = arc.center_y - (ys + 1)

    sum_abs = float(np.abs(d).sum())
    if sum_abs > 0:
        vx = float(np.dot(d, dx)) / sum_abs
        vy = float(np.dot(d, dy)) / sum_abs
    else:
        vx = 0.0
        vy = 0.0

    magnitude = math.hypot(vx, vy)
    bulk_center = (grid - 1) / 2
    target_x = arc.center_x - bulk_center
    target_y = arc.center_y - bulk_center
    target_mag = math.hypot(target_x, target_y) or 1.0
    alignment = (vx * target_x + vy * target_y) / (magnitude * target_mag) if magnitude > 0 else 0.0

    return FlowVector(x=vx, y=vy, magnitude=magnitude, alignment=alignment), sum_abs


def measure_entropy_forces(
    field: npt.ArrayLike,
    grid: int,
    options: Optional[EntropyForceOptions] = None,
) -> List[EntropyForceResult]:
    """
    Flow response of every boundary arc, highest-entropy arcs first.

    Args:
        field: Flat row-major field.
        grid: Side length of the field.
        options: Arc length, perturbation size and relaxation settings.

    Returns:
        One result per arc, empty for grid <= 1.
    """
    if grid <= 1:
        return []
    options = options or EntropyForceOptions()

    base = sanitize_field(field, grid)
    fixed = boundary_mask(grid)
    iterations = max(1, math.floor(options.iterations))
    rate = options.diffusion_rate

    baseline = relax_field(base, grid, fixed, iterations, rate)
    arcs = sample_boundary_entropy(base, grid, options.arc_length)

    results: List[EntropyForceResult] = []
    for arc in arcs:
        perturbed = perturb_arc(base, arc, options.delta)
        propagated = relax_field(perturbed, grid, fixed, iterations, rate)
        flow, total_delta = compute_flow_vector(baseline, propagated, grid, arc)
        results.append(EntropyForceResult(arc=arc, flow=flow, total_delta=total_delta))

    logger.debug(f"Measured {len(results)} arc flows on {grid}x{grid} field")
    return results


def dominant_entropy_force(
    field: npt.ArrayLike,
    grid: int,
    options: Optional[EntropyForceOptions] = None,
) -> Optional[EntropyForceResult]:
    """Result for the highest-entropy arc, or None when there is none."""
    results = measure_entropy_forces(field, grid, options)
    if not results:
        return None
    return max(results, key=lambda r: r.arc.entropy)
