from solislab.reconstruction.sample import BoundarySample, capture_sample
from solislab.reconstruction.linalg import cholesky, cholesky_solve
from solislab.reconstruction.models import (
    DecoderType,
    TrainOptions,
    LinearModel,
    MLPModel,
    ReconstructionModel,
    train_decoder,
    run_decoder,
)
from solislab.reconstruction.masking import MaskMode, MaskOptions, mask_boundary
from solislab.reconstruction.metrics import (
    ReconstructionMetrics,
    EvaluationResult,
    compute_psnr,
    compute_reconstruction_metrics,
    evaluate_reconstruction,
)

__all__ = [
    "BoundarySample",
    "capture_sample",
    "cholesky",
    "cholesky_solve",
    "DecoderType",
    "TrainOptions",
    "LinearModel",
    "MLPModel",
    "ReconstructionModel",
    "train_decoder",
    "run_decoder",
    "MaskMode",
    "MaskOptions",
    "mask_boundary",
    "ReconstructionMetrics",
    "EvaluationResult",
    "compute_psnr",
    "compute_reconstruction_metrics",
    "evaluate_reconstruction",
]
