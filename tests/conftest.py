import matplotlib

matplotlib.use("Agg")

import logging

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    # The CLI binds a handler to the captured stdout of the test that ran it
    yield
    logging.getLogger("solislab").handlers.clear()


@pytest.fixture
def ramp_field():
    """8x8 field with distinct values increasing row by row."""
    grid = 8
    return np.linspace(0.05, 0.95, grid * grid), grid


@pytest.fixture
def random_field():
    grid = 10
    rng = np.random.default_rng(7)
    return rng.uniform(0.0, 1.0, grid * grid), grid
