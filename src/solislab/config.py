"""
Configuration & Path Management
===============================
Central registry for output paths and the numeric constants shared by the
estimators.

Exports:
    REPORTS_DIRNAME (str): Name of the report directory under the working directory.
    get_reports_path(): Default report directory, resolved when called.
    EPS (float): Floor used by the Cholesky factorisation and PSNR.
"""
import os


REPORTS_DIRNAME: str = "reports"


def get_reports_path() -> str:
    """Default directory for batch reports: ./reports under the current working directory."""
    return os.path.join(os.getcwd(), REPORTS_DIRNAME)


# Numeric constants
EPS: float = 1e-9
FIELD_VALUE_LIMIT: float = 1e6
FULL_COVERAGE: float = 0.999

# Area-law sampling
DEFAULT_SAMPLE_LIMIT: int = 128
MIN_REGION_SIZE: int = 3

# Linear decoder
DEFAULT_RIDGE: float = 1e-3
DEFAULT_L2: float = 1e-5

# MLP decoder
DEFAULT_EPOCHS: int = 200
DEFAULT_LEARNING_RATE: float = 0.01
DEFAULT_MLP_SEED: int = 0

# Entropy-flow relaxation
DEFAULT_DELTA: float = 0.12
DEFAULT_ITERATIONS: int = 6
DEFAULT_DIFFUSION: float = 0.35
