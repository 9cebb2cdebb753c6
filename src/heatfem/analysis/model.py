from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from heatfem.analysis.finite_elements import Tri3
from heatfem.pre.boundary import Classification, classify
from heatfem.pre.source import ConstantSource, assemble_load_vector

if TYPE_CHECKING:
    import numpy.typing as npt
    from heatfem.pre.boundary import BoundarySpec
    from heatfem.pre.mesh import Mesh
    from heatfem.pre.source import SourceTerm

logger = logging.getLogger(__name__)


class Model:
    """
    Class represent the entire steady heat diffusion model.

    This class owns the mesh, the boundary classification, the source term and
    the dense global system assembled from them.
    """
    def __init__(
        self,
        mesh: Mesh,
        boundary: BoundarySpec | Classification,
        source: SourceTerm | None = None,
    ) -> None:
        """
        Initialize the Model object.

        Args:
            mesh: Loaded mesh.
            boundary: Prescribed values, either raw (classified here) or already classified.
            source: Heat source term, zero when omitted.
        """
        self.mesh = mesh
        self.source: SourceTerm = source if source is not None else ConstantSource(0.0)

        if isinstance(boundary, Classification):
            if boundary.total_node_count != mesh.number_of_nodes:
                raise ValueError(
                    f"Classification covers {boundary.total_node_count} nodes, mesh has {mesh.number_of_nodes}."
                )
            self.classification = boundary
        else:
            self.classification = classify(boundary, mesh.number_of_nodes)

        self.k_global: npt.NDArray[np.float64] = np.empty((0, 0), dtype=np.float64)
        self.f_global: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self.t_global: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)  # Global temperature vector

    @property
    def number_of_nodes(self) -> int:
        """Return the number of nodes in the model."""
        return self.mesh.number_of_nodes

    @property
    def number_of_elements(self) -> int:
        """Return the number of elements in the model."""
        return self.mesh.number_of_elements

    @property
    def number_of_equations(self) -> int:
        """Return the total number of equations in the model (one temperature per node)."""
        return self.number_of_nodes

    @property
    def neq_free(self) -> int:
        """Number of free equations (interior nodes)."""
        return self.classification.number_of_interior_nodes

    @property
    def neq_fixed(self) -> int:
        """Number of fixed equations (Dirichlet nodes)."""
        return self.classification.number_of_boundary_nodes

    def assemble_global_conductivity_matrix(self) -> None:
        """
        Assemble the dense global conductivity matrix [K] from the linear triangles.

        Other element types are stored in the mesh but not assembled.
        """
        neq = self.number_of_equations
        self.k_global = np.zeros((neq, neq), dtype=np.float64)

        n_skipped = 0
        for element in self.mesh.elements:
            if not isinstance(element, Tri3):
                n_skipped += 1
                continue
            element.accumulate(self.k_global)

        if n_skipped:
            logger.warning(f"{n_skipped} non-triangular elements were skipped during assembly.")
        logger.debug(f"Assembled {neq}x{neq} conductivity matrix from {self.number_of_elements - n_skipped} triangles.")

    def assemble_load_vector(self) -> None:
        """Assemble the global load vector {f} by evaluating the source term at every node."""
        self.f_global = assemble_load_vector(self.mesh.nodes, self.source)
