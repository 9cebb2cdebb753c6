"""Steady 2D heat diffusion with linear triangular finite elements."""
from heatfem.errors import (
    DegenerateElementError,
    HeatFemError,
    InvalidBoundarySpecError,
    MalformedBoundaryError,
    MalformedMeshError,
    SingularSystemError,
)

__version__ = "0.1.0"

__all__ = [
    "DegenerateElementError",
    "HeatFemError",
    "InvalidBoundarySpecError",
    "MalformedBoundaryError",
    "MalformedMeshError",
    "SingularSystemError",
]
