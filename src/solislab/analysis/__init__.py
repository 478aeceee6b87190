from solislab.analysis.regression import RegressionResult, linear_regression
from solislab.analysis.entropy import shannon_entropy
from solislab.analysis.boundary import BoundaryPoint, boundary_ring, boundary_indices, boundary_mask, interior_mask
from solislab.analysis.area_law import Region, AreaLawMetrics, build_sample_sizes, compute_area_law

__all__ = [
    "RegressionResult",
    "linear_regression",
    "shannon_entropy",
    "BoundaryPoint",
    "boundary_ring",
    "boundary_indices",
    "boundary_mask",
    "interior_mask",
    "Region",
    "AreaLawMetrics",
    "build_sample_sizes",
    "compute_area_law",
]
