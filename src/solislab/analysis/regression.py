from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class RegressionResult:
    """Ordinary least squares fit y = slope * x + intercept."""
    slope: float
    intercept: float
    r2: float

    def predict(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """Evaluate the fitted line at x."""
        return self.slope * x + self.intercept


ZERO_FIT = RegressionResult(slope=0.0, intercept=0.0, r2=0.0)


def linear_regression(xs: npt.ArrayLike, ys: npt.ArrayLike) -> RegressionResult:
    """
    Fit a straight line through (xs, ys) by ordinary least squares.

    Only the overlapping prefix of the two sequences is used. This function
    never raises; degenerate inputs map to fixed values.

    Args:
        xs: Regressor values.
        ys: Target values.

    Returns:
        The fit. Empty input gives (0, 0, 0). Constant xs give slope 0 and the
        mean of ys as intercept. Constant ys give r2 = 1.
    """
    x = np.asarray(xs, dtype=np.float64).ravel()
    y = np.asarray(ys, dtype=np.float64).ravel()
    n = min(x.size, y.size)
    if n == 0:
        return ZERO_FIT
    x = x[:n]
    y = y[:n]

    mean_x = float(x.sum() / n)
    mean_y = float(y.sum() / n)
    dx = x - mean_x
    dy = y - mean_y

    cov_xy = float(np.dot(dx, dy))
    var_x = float(np.dot(dx, dx))
    ss_tot = float(np.dot(dy, dy))

    slope = cov_xy / var_x if var_x > 0 else 0.0
    intercept = mean_y - slope * mean_x

    if ss_tot == 0:
        return RegressionResult(slope=slope, intercept=intercept, r2=1.0)

    residuals = y - (slope * x + intercept)
    ss_res = float(np.dot(residuals, residuals))

    r2 = 1.0 - ss_res / ss_tot
    return RegressionResult(slope=slope, intercept=intercept, r2=r2 if math.isfinite(r2) else 0.0)
