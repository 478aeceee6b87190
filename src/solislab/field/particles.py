from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from solislab.field.rng import LCG, Mulberry32


@dataclass(frozen=True)
class Particle:
    id: str
    features: Tuple[float, ...]
    energy: float = 1.0


def lattice_from_seed(seed: int, dims: int) -> List[float]:
    """
    Lattice vector of `dims` LCG draws normalised to sum 1.

    An all-zero draw is left unscaled.
    """
    rand = LCG(seed)
    values = rand.sample(dims)
    total = sum(values) or 1.0
    return [v / total for v in values]


def generate_particles(seed: int, count: int, dims: int) -> List[Particle]:
    """Particles with raw LCG features in [0, 1], seeded from seed * 97 + 13."""
    rand = LCG(seed * 97 + 13)
    return [
        Particle(id=f"p-{seed}-{idx}", features=tuple(rand.sample(dims)))
        for idx in range(count)
    ]


def seeded_possibilities(seed: int, count: int, dims: int) -> List[Particle]:
    """Particles with unit-norm Mulberry32 features."""
    rand = Mulberry32(seed)
    out: List[Particle] = []
    for idx in range(count):
        features = [rand.next() for _ in range(dims)]
        norm = math.hypot(*features) or 1.0
        out.append(Particle(id=f"p{idx}", features=tuple(f / norm for f in features)))
    return out
