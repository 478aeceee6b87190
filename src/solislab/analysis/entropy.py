from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def shannon_entropy(values: npt.ArrayLike) -> float:
    """
    Shannon entropy (nats) of a set of non-negative weights.

    Negative values are clamped to zero and the weights are normalised by
    their sum. Samples with identical values share one probability bin whose
    mass is the sum of its members, so a constant set has zero entropy and a
    set of distinct values reduces to -sum(p * log(p)) over the samples.

    Binning uses exact equality, so the result jumps when ties are broken by
    float noise: [0.5, 0.5] gives 0 while [0.5, 0.5 + 1e-15] gives log(2).
    Round the input first if near-equal values should count as one level.

    Args:
        values: Sample values of a region or boundary arc.

    Returns:
        Entropy in nats, 0 for empty, all-zero or non-finite input.
    """
    arr = np.asarray(values, dtype=np.float64).ravel()
    if arr.size == 0:
        return 0.0
    positive = np.where(arr > 0, arr, 0.0)
    total = float(positive.sum())
    if not math.isfinite(total) or total <= 0:
        return 0.0

    levels, inverse = np.unique(positive, return_inverse=True)
    mass = np.bincount(inverse.ravel(), weights=positive, minlength=levels.size)
    p = mass[mass > 0] / total
    return float(-np.sum(p * np.log(p)))
