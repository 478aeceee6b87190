from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Optional

import numpy as np

from solislab.config import FULL_COVERAGE
from solislab.utils import clamp01

if TYPE_CHECKING:
    import numpy.typing as npt


class MaskMode(StrEnum):
    CONTIGUOUS = "contiguous"
    ALTERNATE = "alternate"


@dataclass(frozen=True)
class MaskOptions:
    """
    Which part of the boundary stays visible.

    Attributes:
        coverage: Visible fraction of the ring, clamped to [0, 1].
        mode: One contiguous run, or evenly spaced positions.
        offset: Contiguous mode only. Start of the run as a fraction of the
            free room (len - kept), clamped to [0, 1].
    """
    coverage: float = 1.0
    mode: MaskMode = MaskMode.CONTIGUOUS
    offset: float = 0.0


def mask_boundary(
    boundary: npt.ArrayLike,
    options: Optional[MaskOptions] = None,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.uint8]]:
    """
    Hide part of a boundary ring.

    Args:
        boundary: Ring values.
        options: Coverage, mode and offset.

    Raises:
        ValueError: If the mode is unknown.

    Returns:
        (masked, mask): masked holds the visible values and zeros elsewhere,
        mask holds 1 at visible positions and 0 elsewhere.
    """
    options = options or MaskOptions()
    values = np.array(boundary, dtype=np.float64).ravel()
    length = values.size
    masked = np.zeros(length, dtype=np.float64)
    mask = np.zeros(length, dtype=np.uint8)
    if length == 0:
        return masked, mask

    coverage = clamp01(options.coverage)
    if coverage >= FULL_COVERAGE:
        mask[:] = 1
        return values, mask

    mode = MaskMode(options.mode)
    keep_count = max(1, math.floor(length * coverage))

    if mode is MaskMode.ALTERNATE:
        step = length / keep_count
        # round half up
        idx = np.array(
            [min(length - 1, math.floor(i * step + 0.5)) for i in range(keep_count)],
            dtype=np.int64,
        )
    else:
        start = math.floor((length - keep_count) * clamp01(options.offset))
        idx = np.arange(start, min(length, start + keep_count), dtype=np.int64)

    masked[idx] = values[idx]
    mask[idx] = 1
    return masked, mask
