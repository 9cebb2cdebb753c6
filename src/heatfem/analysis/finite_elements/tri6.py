from __future__ import annotations

from typing import TYPE_CHECKING

from heatfem.analysis.finite_elements.finite_element import ElementType, FiniteElement

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt


class Tri6(FiniteElement):
    """
    Represents a six-node quadratic triangular finite element (Tri6).

    Nodes 0-2 are the vertices, nodes 3-5 the edge midpoints (gmsh ordering).
    """
    element_type = ElementType.TRIANGLE_2ND_ORDER
    nodes_per_element = 6

    def get_conductivity_matrix(self) -> npt.NDArray[np.float64]:
        raise NotImplementedError(
            "Tri6 elements are not yet implemented. "
            "Please use Tri3 elements for now."
        )
