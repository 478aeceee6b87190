from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from solislab.analysis.boundary import interior_mask
from solislab.config import EPS
from solislab.reconstruction.masking import MaskOptions, mask_boundary
from solislab.reconstruction.models import run_decoder

if TYPE_CHECKING:
    import numpy.typing as npt
    from solislab.reconstruction.models import ReconstructionModel
    from solislab.reconstruction.sample import BoundarySample


@dataclass(frozen=True)
class ReconstructionMetrics:
    mse: float
    mse_interior: float
    psnr: float
    psnr_interior: float


@dataclass(frozen=True, eq=False)
class EvaluationResult:
    metrics: ReconstructionMetrics
    predicted: npt.NDArray[np.float64]
    masked_boundary: npt.NDArray[np.float64]
    mask: npt.NDArray[np.uint8]


def compute_psnr(mse: float, peak: float = 1.0) -> float:
    """
    Peak signal-to-noise ratio in dB.

    Returns:
        +inf when mse <= 1e-9, otherwise 20 log10(peak) - 10 log10(mse).
    """
    if mse <= EPS:
        return math.inf
    return 20.0 * math.log10(peak) - 10.0 * math.log10(mse)


def compute_reconstruction_metrics(
    sample: BoundarySample,
    predicted: npt.ArrayLike,
) -> ReconstructionMetrics:
    """
    Squared error of a prediction over the whole field and over the interior.

    The interior excludes the outermost ring, i.e. the cells a decoder sees as
    input. For grid 2 there is no interior and the full-field value is reused.

    Raises:
        ValueError: If predicted and sample.bulk differ in length.
    """
    pred = np.asarray(predicted, dtype=np.float64).ravel()
    if pred.size != sample.bulk.size:
        raise ValueError(
            f"Predicted vector length mismatch: {pred.size} != {sample.bulk.size}."
        )
    sq_err = (np.asarray(sample.bulk, dtype=np.float64) - pred) ** 2
    mse = float(sq_err.mean()) if sq_err.size else 0.0

    interior = interior_mask(sample.grid)
    mse_interior = float(sq_err[interior].mean()) if interior.any() else mse

    return ReconstructionMetrics(
        mse=mse,
        mse_interior=mse_interior,
        psnr=compute_psnr(mse),
        psnr_interior=compute_psnr(mse_interior),
    )


def evaluate_reconstruction(
    sample: BoundarySample,
    model: ReconstructionModel,
    options: Optional[MaskOptions] = None,
) -> EvaluationResult:
    """Mask the sample boundary, decode it and score the prediction against the bulk."""
    masked, mask = mask_boundary(sample.boundary, options)
    predicted = run_decoder(model, masked)
    metrics = compute_reconstruction_metrics(sample, predicted)
    return EvaluationResult(metrics=metrics, predicted=predicted, masked_boundary=masked, mask=mask)
