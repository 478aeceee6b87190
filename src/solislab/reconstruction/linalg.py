from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numba as nb
import scipy as sp

from solislab.config import EPS

if TYPE_CHECKING:
    import numpy.typing as npt


@nb.njit(cache=True)
def _cholesky_floor(matrix: npt.NDArray[np.float64], eps: float) -> npt.NDArray[np.float64]:
    """
    Lower Cholesky factor L with L @ L.T ~= matrix.

    Pivots below eps are raised to eps instead of failing, so near-singular
    or slightly indefinite matrices still factor.
    """
    n = matrix.shape[0]
    L = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1):
            s = matrix[i, j]
            for k in range(j):
                s -= L[i, k] * L[j, k]
            if i == j:
                if s < eps:
                    s = eps
                L[i, j] = np.sqrt(s)
            else:
                L[i, j] = s / L[j, j]
    return L


def cholesky(matrix: npt.ArrayLike, eps: float = EPS) -> npt.NDArray[np.float64]:
    """
    Cholesky factorisation with a diagonal floor.

    Args:
        matrix: Symmetric (n, n) matrix. Only the lower triangle is read.
        eps: Smallest admissible pivot before the square root.

    Raises:
        ValueError: If the matrix is not square.

    Returns:
        Lower triangular factor, shape (n, n).
    """
    a = np.ascontiguousarray(matrix, dtype=np.float64)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"Cholesky needs a square matrix, got shape {a.shape}.")
    return _cholesky_floor(a, eps)


def cholesky_solve(L: npt.NDArray[np.float64], b: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Solve (L @ L.T) x = b by forward then back substitution.

    Args:
        L: Lower triangular factor from `cholesky`.
        b: Right-hand side, shape (n,) or (n, m); each column is solved independently.

    Returns:
        Solution with the shape of b.
    """
    rhs = np.asarray(b, dtype=np.float64)
    y = sp.linalg.solve_triangular(L, rhs, lower=True, check_finite=False)
    return sp.linalg.solve_triangular(L.T, y, lower=False, check_finite=False)
