from heatfem.pre.mesh import Mesh
from heatfem.pre.boundary import BoundarySpec, Classification, classify, fill_interior_gaps
from heatfem.pre.generate import write_rectangle_mesh
from heatfem.pre.source import (
    ConstantSource,
    QuadraticSource,
    SourceKind,
    SourceTerm,
    assemble_load_vector,
    source_from_config,
)

__all__ = [
    "BoundarySpec",
    "Classification",
    "ConstantSource",
    "Mesh",
    "QuadraticSource",
    "SourceKind",
    "SourceTerm",
    "assemble_load_vector",
    "classify",
    "fill_interior_gaps",
    "source_from_config",
    "write_rectangle_mesh",
]
