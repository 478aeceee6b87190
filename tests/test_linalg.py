import math

import numpy as np
import pytest

from solislab.reconstruction import cholesky, cholesky_solve


def _spd(n, seed=0):
    rng = np.random.default_rng(seed)
    a = rng.normal(size=(n, n))
    return a @ a.T + n * np.eye(n)


def test_matches_numpy_factor():
    matrix = _spd(6)
    np.testing.assert_allclose(cholesky(matrix), np.linalg.cholesky(matrix), atol=1e-10)


def test_solve_vector_and_matrix_rhs():
    matrix = _spd(5, seed=2)
    L = cholesky(matrix)
    rng = np.random.default_rng(3)
    b = rng.normal(size=5)
    B = rng.normal(size=(5, 3))
    np.testing.assert_allclose(cholesky_solve(L, b), np.linalg.solve(matrix, b), atol=1e-9)
    np.testing.assert_allclose(cholesky_solve(L, B), np.linalg.solve(matrix, B), atol=1e-9)


def test_pivot_floor_on_singular_matrix():
    L = cholesky(np.zeros((3, 3)), eps=1e-9)
    np.testing.assert_allclose(np.diag(L), math.sqrt(1e-9))
    assert np.all(np.isfinite(L))
    assert L[1, 0] == 0.0


def test_non_square_matrix():
    with pytest.raises(ValueError):
        cholesky(np.zeros((2, 3)))
