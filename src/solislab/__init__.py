"""
Numeric experimentation toolkit for boundary/bulk scalar fields: area-law
fits, boundary-to-bulk reconstruction, entropy-flow estimation and batch
parameter sweeps.
"""
from solislab.analysis import linear_regression, compute_area_law
from solislab.reconstruction import (
    capture_sample,
    train_decoder,
    run_decoder,
    mask_boundary,
    compute_psnr,
    compute_reconstruction_metrics,
    evaluate_reconstruction,
)
from solislab.flow import measure_entropy_forces
from solislab.experiments import run_batch_experiments, aggregate_summary, format_experiment_csv

__all__ = [
    "linear_regression",
    "compute_area_law",
    "capture_sample",
    "train_decoder",
    "run_decoder",
    "mask_boundary",
    "compute_psnr",
    "compute_reconstruction_metrics",
    "evaluate_reconstruction",
    "measure_entropy_forces",
    "run_batch_experiments",
    "aggregate_summary",
    "format_experiment_csv",
]
