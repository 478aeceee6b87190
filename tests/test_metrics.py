import math

import numpy as np
import pytest

from solislab.analysis.boundary import boundary_indices
from solislab.reconstruction import (
    MaskOptions,
    capture_sample,
    compute_psnr,
    compute_reconstruction_metrics,
    evaluate_reconstruction,
    train_decoder,
)


def test_psnr_values():
    assert compute_psnr(0.0) == math.inf
    assert compute_psnr(1e-10) == math.inf
    assert compute_psnr(0.01) == pytest.approx(20.0)
    assert compute_psnr(0.001) > compute_psnr(0.01) > compute_psnr(0.1)


def test_interior_ignores_boundary_errors(random_field):
    field, grid = random_field
    sample = capture_sample(field, grid)
    predicted = field.copy()
    predicted[boundary_indices(grid)] += 0.25
    metrics = compute_reconstruction_metrics(sample, predicted)
    assert metrics.mse > 0
    assert metrics.mse_interior == 0.0
    assert metrics.psnr_interior == math.inf
    assert math.isfinite(metrics.psnr)


def test_grid_without_interior_reuses_full_error():
    sample = capture_sample([0.1, 0.2, 0.3, 0.4], 2)
    metrics = compute_reconstruction_metrics(sample, [0.0, 0.0, 0.0, 0.0])
    assert metrics.mse_interior == metrics.mse
    assert metrics.mse == pytest.approx((0.01 + 0.04 + 0.09 + 0.16) / 4)


def test_length_mismatch(random_field):
    field, grid = random_field
    sample = capture_sample(field, grid)
    with pytest.raises(ValueError):
        compute_reconstruction_metrics(sample, field[:-1])


def test_evaluate_reconstruction():
    grid = 6
    sample = capture_sample(np.full(grid * grid, 0.4), grid)
    model = train_decoder([sample])
    result = evaluate_reconstruction(sample, model)
    assert result.mask.tolist() == [1] * (4 * grid - 4)
    assert result.predicted.shape == (grid * grid,)
    assert result.metrics.mse < 1e-6

    partial = evaluate_reconstruction(sample, model, MaskOptions(coverage=0.25))
    assert partial.mask.sum() == 5
    assert partial.metrics.mse > result.metrics.mse
