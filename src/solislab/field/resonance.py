from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def cosine_sim01(a: npt.ArrayLike, b: npt.ArrayLike) -> float:
    """
    Cosine similarity mapped from [-1, 1] to [0, 1].

    Only the overlapping prefix is compared. Returns 0 when either vector has
    zero norm.
    """
    u = np.asarray(a, dtype=np.float64).ravel()
    v = np.asarray(b, dtype=np.float64).ravel()
    n = min(u.size, v.size)
    u = u[:n]
    v = v[:n]
    nu = float(np.dot(u, u))
    nv = float(np.dot(v, v))
    if nu == 0 or nv == 0:
        return 0.0
    raw = float(np.dot(u, v)) / np.sqrt(nu * nv)
    return (raw + 1.0) / 2.0


def resonance_stats(
    features: Sequence[npt.ArrayLike],
    lattice: npt.ArrayLike,
) -> Tuple[npt.NDArray[np.float64], float, float]:
    """
    Resonance of each feature vector against the lattice.

    Returns:
        (values, mean, variance) with the population variance; mean and
        variance are 0 for an empty set.
    """
    values = np.array([cosine_sim01(f, lattice) for f in features], dtype=np.float64)
    if values.size == 0:
        return values, 0.0, 0.0
    mean = float(values.mean())
    variance = float(np.mean((values - mean) ** 2))
    return values, mean, variance
