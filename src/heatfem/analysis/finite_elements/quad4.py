from __future__ import annotations

from typing import TYPE_CHECKING

from heatfem.analysis.finite_elements.finite_element import ElementType, FiniteElement

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt


class Quad4(FiniteElement):
    """
    Represents a four-node linear quadrilateral finite element (Quad4).
    """
    element_type = ElementType.QUADRILATERAL
    nodes_per_element = 4

    def get_conductivity_matrix(self) -> npt.NDArray[np.float64]:
        raise NotImplementedError(
            "Quad4 elements are not yet implemented. "
            "Please use Tri3 elements for now."
        )
