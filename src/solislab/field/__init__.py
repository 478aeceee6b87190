from solislab.field.rng import LCG, XorShift32, Mulberry32
from solislab.field.resonance import cosine_sim01, resonance_stats
from solislab.field.particles import Particle, lattice_from_seed, generate_particles, seeded_possibilities
from solislab.field.generator import (
    HolographicBulk,
    SMOOTH_KERNEL,
    RIGID_KERNEL,
    apply_kernel,
    apply_lattice,
    compute_holographic_bulk,
)

__all__ = [
    "LCG",
    "XorShift32",
    "Mulberry32",
    "cosine_sim01",
    "resonance_stats",
    "Particle",
    "lattice_from_seed",
    "generate_particles",
    "seeded_possibilities",
    "HolographicBulk",
    "SMOOTH_KERNEL",
    "RIGID_KERNEL",
    "apply_kernel",
    "apply_lattice",
    "compute_holographic_bulk",
]
