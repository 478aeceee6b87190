"""
Holographic Bulk Field Generator
================================
Synthesises the input fields of the batch experiments.

A field is built from three ingredients:
1. Background noise drawn from a seeded xorshift generator.
2. A particle source: Gaussian bumps placed by particle features and
   weighted by their resonance with the lattice vector.
3. `depth` passes of the lattice kernel (smooth/rigid blend set by the
   kernel mix), followed by noise on the boundary ring.

The output is a pure function of its arguments.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np

from solislab.analysis.boundary import boundary_mask
from solislab.config import EPS
from solislab.field.particles import seeded_possibilities
from solislab.field.resonance import cosine_sim01
from solislab.field.rng import MASK32, XorShift32
from solislab.utils import clamp01

if TYPE_CHECKING:
    import numpy.typing as npt

BASE_GRID = 16
GRID_PER_DEPTH = 4

SMOOTH_KERNEL = np.array([
    [0.07, 0.12, 0.07],
    [0.12, 0.26, 0.12],
    [0.07, 0.12, 0.07],
], dtype=np.float64)

RIGID_KERNEL = np.array([
    [0.0, -1.0, 0.0],
    [-1.0, 4.0, -1.0],
    [0.0, -1.0, 0.0],
], dtype=np.float64)


@dataclass(frozen=True, eq=False)
class HolographicBulk:
    """
    Generated field channels.

    Attributes:
        grid: Side length of every channel.
        field: (bulk, source); field[0] is the analysed bulk in [0, 1].
    """
    grid: int
    field: Tuple[npt.NDArray[np.float64], ...]


def grid_for_depth(depth: int) -> int:
    return BASE_GRID + GRID_PER_DEPTH * max(0, int(depth))


def blend_kernel(kernel_mix: float) -> npt.NDArray[np.float64]:
    """Linear blend of the smooth (mix 0) and rigid (mix 1) kernels."""
    mix = clamp01(kernel_mix)
    return SMOOTH_KERNEL * (1.0 - mix) + RIGID_KERNEL * mix


def apply_kernel(
    field: npt.NDArray[np.float64],
    grid: int,
    kernel: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    3x3 convolution with periodic wrap-around.

    The result is divided by the sum of absolute kernel weights; an all-zero
    kernel returns a copy of the field.
    """
    weight = float(np.abs(kernel).sum())
    if weight <= 0:
        return np.array(field, dtype=np.float64)
    phi = np.asarray(field, dtype=np.float64).reshape(grid, grid)
    acc = np.zeros_like(phi)
    for ky in (-1, 0, 1):
        for kx in (-1, 0, 1):
            w = kernel[ky + 1, kx + 1]
            if w != 0:
                acc += w * np.roll(phi, shift=(-ky, -kx), axis=(0, 1))
    return (acc / weight).ravel()


def apply_lattice(field: npt.ArrayLike, grid: int, kernel_mix: float = 0.0) -> npt.NDArray[np.float64]:
    """Shape a field with the kernel blended by kernel_mix."""
    return apply_kernel(np.asarray(field, dtype=np.float64), grid, blend_kernel(kernel_mix))


def normalize01(values: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Min-max rescale to [0, 1]; a flat array is only clipped."""
    lo = float(values.min())
    hi = float(values.max())
    if hi - lo <= EPS:
        return np.clip(values, 0.0, 1.0)
    return (values - lo) / (hi - lo)


def lattice_seed(lattice: Sequence[float], particle_count: int) -> int:
    """FNV-1a style hash of the lattice (micro-unit resolution) and particle count."""
    h = 2166136261
    for value in lattice:
        h ^= int(round(float(value) * 1e6)) & MASK32
        h = (h * 16777619) & MASK32
    h ^= int(particle_count) & MASK32
    return (h * 16777619) & MASK32


def particle_source(
    lattice: npt.NDArray[np.float64],
    particle_count: int,
    grid: int,
    seed: int,
) -> npt.NDArray[np.float64]:
    """Sum of resonance-weighted Gaussian bumps placed by particle features, in [0, 1]."""
    dims = max(1, lattice.size)
    particles = seeded_possibilities(seed, particle_count, dims)
    coords = np.arange(grid, dtype=np.float64)
    gx, gy = np.meshgrid(coords, coords)
    sigma = max(1.0, grid / 8)
    source = np.zeros((grid, grid), dtype=np.float64)
    for particle in particles:
        weight = cosine_sim01(particle.features, lattice)
        px = particle.features[0] * (grid - 1)
        py = particle.features[1 % dims] * (grid - 1)
        source += weight * np.exp(-((gx - px) ** 2 + (gy - py) ** 2) / (2 * sigma ** 2))
    peak = float(source.max())
    if peak > 0:
        source /= peak
    return source.ravel()


def compute_holographic_bulk(
    lattice: npt.ArrayLike,
    particle_count: int,
    depth: int,
    boundary_noise: float,
    kernel_mix: float,
) -> HolographicBulk:
    """
    Generate a bulk field for one experiment configuration.

    Args:
        lattice: Lattice vector (also the resonance reference of the particles).
        particle_count: Number of source particles.
        depth: Number of kernel passes; also sets the grid size 16 + 4 * depth.
        boundary_noise: Amplitude of the uniform noise added to the ring.
        kernel_mix: Smooth (0) to rigid (1) kernel blend, clamped to [0, 1].

    Returns:
        The generated channels; identical inputs give identical fields.
    """
    lattice_vec = np.asarray(lattice, dtype=np.float64).ravel()
    depth = max(0, int(depth))
    grid = grid_for_depth(depth)
    seed = lattice_seed(lattice_vec.tolist(), particle_count)
    rng = XorShift32(seed)

    noise = np.array([rng.next() for _ in range(grid * grid)], dtype=np.float64)
    source = particle_source(lattice_vec, particle_count, grid, seed)
    bulk = 0.5 * noise + 0.5 * source

    kernel = blend_kernel(kernel_mix)
    for _ in range(depth):
        bulk = normalize01(apply_kernel(bulk, grid, kernel))

    ring = np.flatnonzero(boundary_mask(grid))
    jitter = np.array([rng.next() * 2.0 - 1.0 for _ in range(ring.size)], dtype=np.float64)
    bulk[ring] += boundary_noise * jitter
    np.clip(bulk, 0.0, 1.0, out=bulk)

    source.setflags(write=False)
    bulk.setflags(write=False)
    return HolographicBulk(grid=grid, field=(bulk, source))
