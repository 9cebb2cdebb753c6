from __future__ import annotations

from typing import TYPE_CHECKING

from heatfem.analysis.finite_elements.finite_element import ElementType, FiniteElement

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt


class Quad8(FiniteElement):
    """
    Represents an eight-node quadratic quadrilateral finite element (Quad8).

    The element is read from the mesh and kept in the element list, but only
    linear triangles contribute to the conductivity matrix.
    """
    element_type = ElementType.QUADRILATERAL_2ND_ORDER
    nodes_per_element = 8

    def get_conductivity_matrix(self) -> npt.NDArray[np.float64]:
        raise NotImplementedError(
            "Quad8 elements are not yet implemented. "
            "Please use Tri3 elements for now."
        )
