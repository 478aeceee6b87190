from solislab.flow.arcs import BoundaryArc, sample_boundary_entropy
from solislab.flow.relaxation import relax_field
from solislab.flow.perturb import (
    EntropyForceOptions,
    FlowVector,
    EntropyForceResult,
    measure_entropy_forces,
    dominant_entropy_force,
)

__all__ = [
    "BoundaryArc",
    "sample_boundary_entropy",
    "relax_field",
    "EntropyForceOptions",
    "FlowVector",
    "EntropyForceResult",
    "measure_entropy_forces",
    "dominant_entropy_force",
]
