from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from heatfem.analysis.finite_elements.finite_element import ElementType, FiniteElement
from heatfem.config import DEGENERATE_ELEMENT_RTOL
from heatfem.errors import DegenerateElementError
from heatfem.utils import assemble_subarray_at_indices

if TYPE_CHECKING:
    import numpy.typing as npt
    from heatfem.analysis.node import Node

logger = logging.getLogger(__name__)


def _edge_differences(
    coords: npt.NDArray[np.float64],
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Coordinate differences of the two vertices opposite each vertex, in cyclic order.

    a = [x1 - x2, x2 - x0, x0 - x1]
    b = [y1 - y2, y2 - y0, y0 - y1]
    """
    x = coords[:, 0]
    y = coords[:, 1]
    a = np.array([x[1] - x[2], x[2] - x[0], x[0] - x[1]])
    b = np.array([y[1] - y[2], y[2] - y[0], y[0] - y[1]])
    return a, b


def triangle_jacobian(coords: npt.NDArray[np.float64]) -> float:
    """
    Jacobian of a linear triangle: twice its area, magnitude only.

    Args:
        coords: (3, 2) vertex coordinates.

    Raises:
        DegenerateElementError: If the vertices are collinear or coincide.
    """
    coords = np.asarray(coords, dtype=np.float64).reshape(3, 2)
    a, b = _edge_differences(coords)
    jacobian = abs(a[1] * b[2] - a[2] * b[1])

    longest_edge_sq = float(np.max(a ** 2 + b ** 2))
    if jacobian <= DEGENERATE_ELEMENT_RTOL * longest_edge_sq:
        raise DegenerateElementError(
            f"Triangle with vertices {coords.tolist()} has zero area (J={jacobian:.3e})."
        )
    return float(jacobian)


def triangle_conductivity_matrix(coords: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Local conductivity (stiffness) matrix of a linear triangle with unit conductivity.

    k[p, q] = (a_p * a_q + b_p * b_q) / (2 J)

    The vertex order only flips the sign of the signed area, which the Jacobian
    discards, so clockwise and counter-clockwise triangles give the same matrix.

    Args:
        coords: (3, 2) vertex coordinates in connectivity order.

    Returns:
        (3, 3) symmetric matrix whose rows sum to zero.
    """
    coords = np.asarray(coords, dtype=np.float64).reshape(3, 2)
    jacobian = triangle_jacobian(coords)
    a, b = _edge_differences(coords)
    return (np.outer(a, a) + np.outer(b, b)) / (2.0 * jacobian)


def accumulate_triangle(
    node_i: Node,
    node_j: Node,
    node_k: Node,
    k_global: npt.NDArray[np.float64],
) -> None:
    """
    Scatter the conductivity matrix of the triangle (node_i, node_j, node_k) into k_global.

    Only k_global is modified, and only by addition.
    """
    coords = np.array([node_i.coords, node_j.coords, node_k.coords])
    assemble_subarray_at_indices(
        array=k_global,
        subarray=triangle_conductivity_matrix(coords),
        indices=[node_i.uid, node_j.uid, node_k.uid],
    )


class Tri3(FiniteElement):
    """
    Represents a three-node linear triangular finite element (Tri3).
    """
    element_type = ElementType.TRIANGLE
    nodes_per_element = 3

    @property
    def coords(self) -> npt.NDArray[np.float64]:
        """(3, 2) array of vertex coordinates."""
        return np.array([node.coords for node in self.nodes])

    @property
    def area(self) -> float:
        """
        Calculate the signed area of the Tri3 element.

        Positive for counter-clockwise vertex order.
        """
        x1, y1 = self.nodes[0].coords
        x2, y2 = self.nodes[1].coords
        x3, y3 = self.nodes[2].coords

        return 0.5 * (x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2))

    @property
    def jacobian(self) -> float:
        """Twice the unsigned area of the element."""
        return triangle_jacobian(self.coords)

    def get_conductivity_matrix(self) -> npt.NDArray[np.float64]:
        """
        Calculate the conductivity matrix [K] for the Tri3 element.

        Raises:
            DegenerateElementError: If the element has zero area.
        """
        try:
            return triangle_conductivity_matrix(self.coords)
        except DegenerateElementError:
            logger.error(f"Element {self.id} with nodes {self.node_ids} is degenerate.")
            raise

    def accumulate(self, k_global: npt.NDArray[np.float64]) -> None:
        """Add the element conductivity matrix into the global matrix."""
        try:
            accumulate_triangle(*self.nodes, k_global)
        except DegenerateElementError:
            logger.error(f"Element {self.id} with nodes {self.node_ids} is degenerate.")
            raise
