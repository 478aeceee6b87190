import math

import numpy as np
import pytest

from solislab.analysis.regression import linear_regression


def test_perfect_line():
    fit = linear_regression([1, 2, 3], [2, 4, 6])
    assert fit.slope == pytest.approx(2.0)
    assert fit.intercept == pytest.approx(0.0, abs=1e-12)
    assert fit.r2 == pytest.approx(1.0)


def test_constant_inputs_and_targets():
    fit = linear_regression([1, 1, 1], [5, 5, 5])
    assert fit.slope == 0.0
    assert fit.intercept == 5.0
    assert fit.r2 == 1.0


def test_empty_input():
    fit = linear_regression([], [])
    assert (fit.slope, fit.intercept, fit.r2) == (0.0, 0.0, 0.0)


def test_constant_xs_gives_mean_intercept():
    fit = linear_regression([2, 2, 2, 2], [1, 3, 5, 7])
    assert fit.slope == 0.0
    assert fit.intercept == pytest.approx(4.0)
    assert fit.r2 == pytest.approx(0.0)


def test_mismatched_lengths_use_overlap():
    truncated = linear_regression([1, 2, 3, 4, 5], [3, 5, 7])
    reference = linear_regression([1, 2, 3], [3, 5, 7])
    assert truncated == reference
    assert truncated.slope == pytest.approx(2.0)
    assert truncated.intercept == pytest.approx(1.0)


def test_noisy_fit_r2_below_one():
    rng = np.random.default_rng(3)
    xs = np.arange(50, dtype=float)
    ys = 0.5 * xs + rng.normal(0, 3, xs.size)
    fit = linear_regression(xs, ys)
    assert 0.0 < fit.r2 < 1.0
    assert fit.slope == pytest.approx(np.polyfit(xs, ys, 1)[0])


def test_r2_never_above_one_and_finite():
    fit = linear_regression([0, 1, 2, 3], [10, -10, 10, -10])
    assert fit.r2 <= 1.0
    assert math.isfinite(fit.r2)


def test_predict():
    fit = linear_regression([0, 1], [1, 3])
    assert fit.predict(2.0) == pytest.approx(5.0)
