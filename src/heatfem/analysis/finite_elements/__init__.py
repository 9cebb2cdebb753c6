from heatfem.analysis.finite_elements.finite_element import ElementType, FiniteElement
from heatfem.analysis.finite_elements.tri3 import (
    Tri3,
    accumulate_triangle,
    triangle_conductivity_matrix,
    triangle_jacobian,
)
from heatfem.analysis.finite_elements.quad4 import Quad4
from heatfem.analysis.finite_elements.tri6 import Tri6
from heatfem.analysis.finite_elements.quad8 import Quad8

# Element classes stored in the mesh, keyed by gmsh element type code
ELEMENT_CLASS_MAP: dict[int, type[FiniteElement]] = {
    ElementType.TRIANGLE: Tri3,
    ElementType.QUADRILATERAL: Quad4,
    ElementType.TRIANGLE_2ND_ORDER: Tri6,
    ElementType.QUADRILATERAL_2ND_ORDER: Quad8,
}

__all__ = [
    "ELEMENT_CLASS_MAP",
    "ElementType",
    "FiniteElement",
    "Quad4",
    "Quad8",
    "Tri3",
    "Tri6",
    "accumulate_triangle",
    "triangle_conductivity_matrix",
    "triangle_jacobian",
]
