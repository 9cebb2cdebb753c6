from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

from typing import TYPE_CHECKING

import numpy as np

from heatfem.utils import assemble_subarray_at_indices

if TYPE_CHECKING:
    import numpy.typing as npt
    from heatfem.analysis.node import Node


class ElementType(IntEnum):
    """Element types recognized in a gmsh mesh, valued by their gmsh type code."""
    EDGE = 1
    TRIANGLE = 2
    QUADRILATERAL = 3
    TRIANGLE_2ND_ORDER = 9
    POINT = 15
    QUADRILATERAL_2ND_ORDER = 16


class FiniteElement(ABC):
    """
    Abstract base class for finite elements in the heat diffusion analysis.
    """
    element_type: ElementType
    nodes_per_element: int

    def __init__(
        self,
        index: int,
        nodes: list[Node],
    ) -> None:
        """
        Initialize the finite element with an index and its nodes.

        Args:
            index: Position of the element in the mesh element list.
            nodes: Nodes of the element, in connectivity order.
        """
        if len(nodes) != self.nodes_per_element:
            raise ValueError(
                f"{self.__class__.__name__} needs {self.nodes_per_element} nodes, got {len(nodes)}."
            )
        self.id = index
        self.nodes = tuple(nodes)
        self.global_dofs: npt.NDArray[np.int64] = np.array([node.uid for node in nodes], dtype=np.int64)

    def __repr__(self) -> str:
        """String representation of the finite element."""
        return f"{self.__class__.__name__}(id={self.id}, nodes={self.global_dofs.tolist()})"

    @property
    def number_of_nodes(self) -> int:
        """Number of nodes in the finite element."""
        return len(self.nodes)

    @property
    def node_ids(self) -> tuple[int, ...]:
        """Zero-based indices of the element nodes."""
        return tuple(int(dof) for dof in self.global_dofs)

    @abstractmethod
    def get_conductivity_matrix(self) -> npt.NDArray[np.float64]:
        """Calculate the conductivity matrix [K] for the finite element."""
        pass

    def accumulate(self, k_global: npt.NDArray[np.float64]) -> None:
        """Add the element conductivity matrix into the global matrix."""
        assemble_subarray_at_indices(
            array=k_global,
            subarray=self.get_conductivity_matrix(),
            indices=self.global_dofs,
        )
