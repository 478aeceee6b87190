import numpy as np
import pytest

from solislab.analysis.boundary import boundary_indices
from solislab.reconstruction import capture_sample


def test_boundary_follows_ring(random_field):
    field, grid = random_field
    sample = capture_sample(field, grid)
    assert sample.boundary_size == 4 * grid - 4
    assert sample.bulk_size == grid * grid
    np.testing.assert_array_equal(sample.boundary, field[boundary_indices(grid)])
    np.testing.assert_array_equal(sample.bulk, field)


def test_boundary_reinserts_into_field(random_field):
    field, grid = random_field
    sample = capture_sample(field, grid)
    rebuilt = np.zeros(grid * grid)
    inner = np.ones(grid * grid, dtype=bool)
    inner[boundary_indices(grid)] = False
    rebuilt[inner] = field[inner]
    rebuilt[boundary_indices(grid)] = sample.boundary
    np.testing.assert_array_equal(rebuilt, field)


def test_sample_is_an_independent_copy(ramp_field):
    field, grid = ramp_field
    field = field.copy()
    sample = capture_sample(field, grid)
    field[:] = -1.0
    assert sample.bulk.min() > 0
    assert not sample.bulk.flags.writeable
    assert not sample.boundary.flags.writeable


def test_smallest_grid():
    sample = capture_sample([0.1, 0.2, 0.3, 0.4], 2)
    assert sample.boundary.tolist() == [0.1, 0.2, 0.4, 0.3]


def test_invalid_inputs():
    with pytest.raises(ValueError):
        capture_sample([0.5], 1)
    with pytest.raises(ValueError):
        capture_sample(np.zeros(15), 4)
