"""
FEM Solver Engine
=================
Eliminates the Dirichlet nodes from the global system, solves the reduced
system with a dense direct solver and rebuilds the full temperature field.

Note: dense storage is O(N^2) and the solve O(M^3); this is meant for small meshes.
"""
from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

import numpy as np
import scipy as sp

from heatfem.errors import SingularSystemError

if TYPE_CHECKING:
    import numpy.typing as npt

    from heatfem.analysis.model import Model
    from heatfem.pre.boundary import Classification

logger = logging.getLogger(__name__)


def reduce_system(
    k_global: npt.NDArray[np.float64],
    f_global: npt.NDArray[np.float64],
    classification: Classification,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Move the known boundary values to the right-hand side.

    For interior positions i, j and boundary positions b:

        k_reduced[i, j] = K[I_i, I_j]
        f_reduced[i]    = f[I_i] - sum_b K[I_i, B_b] * value_b

    Returns:
        The (M, M) matrix and length-M vector indexed by position in the interior list.
    """
    interior = classification.interior_nodes
    boundary = classification.boundary_nodes

    k_reduced = k_global[np.ix_(interior, interior)]
    f_reduced = f_global[interior] - k_global[np.ix_(interior, boundary)] @ classification.boundary_values

    logger.debug(f"Reduced {k_global.shape[0]} equations to {interior.size}.")
    return k_reduced, f_reduced


def solve_reduced(
    k_reduced: npt.NDArray[np.float64],
    f_reduced: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Solve k_reduced @ u = f_reduced with a dense LU factorization.

    Raises:
        SingularSystemError: If the matrix is singular or too ill-conditioned for a reliable solution.
    """
    if k_reduced.shape[0] == 0:
        return np.empty(0, dtype=np.float64)

    with warnings.catch_warnings():
        warnings.simplefilter("error", sp.linalg.LinAlgWarning)
        try:
            u_interior = sp.linalg.solve(k_reduced, f_reduced, assume_a="sym")
        except (np.linalg.LinAlgError, sp.linalg.LinAlgWarning) as e:
            logger.error(f"Reduced system of size {k_reduced.shape[0]} could not be solved: {e}")
            raise SingularSystemError(
                f"Reduced conductivity matrix ({k_reduced.shape[0]}x{k_reduced.shape[0]}) is singular "
                "or ill-conditioned. Check that every connected part of the mesh has a boundary node."
            ) from e

    if not np.all(np.isfinite(u_interior)):
        raise SingularSystemError("Solution of the reduced system contains non-finite values.")
    return u_interior


def back_substitute(
    u_interior: npt.NDArray[np.float64],
    classification: Classification,
) -> npt.NDArray[np.float64]:
    """
    Merge prescribed and solved values into the full field, addressed by node index.
    """
    if u_interior.shape != (classification.number_of_interior_nodes,):
        raise ValueError(
            f"Expected {classification.number_of_interior_nodes} interior values, got {u_interior.shape}."
        )
    u = np.empty(classification.total_node_count, dtype=np.float64)
    u[classification.boundary_nodes] = classification.boundary_values
    u[classification.interior_nodes] = u_interior
    return u


class Solver:
    """
    Class for a steady-state FEM solver.
    """

    def __init__(
        self,
        model: Model,
    ) -> None:
        """
        Initialize the solver with a model.

        Args:
            model: The model to be solved.
        """
        self.model = model

    def solve(self) -> npt.NDArray[np.float64]:
        """
        Assemble, reduce, solve and back-substitute.

        Returns:
            The temperature at every node; also stored as ``model.t_global``.
        """
        model = self.model
        logger.info(
            f"Solving steady heat problem: {model.number_of_equations} equations, "
            f"{model.neq_fixed} fixed, {model.neq_free} free."
        )

        model.assemble_global_conductivity_matrix()
        model.assemble_load_vector()

        k_reduced, f_reduced = reduce_system(model.k_global, model.f_global, model.classification)
        u_interior = solve_reduced(k_reduced, f_reduced)
        model.t_global = back_substitute(u_interior, model.classification)

        logger.info(
            f"Solved. Temperature range [{model.t_global.min():.4g}, {model.t_global.max():.4g}]."
            if model.t_global.size else "Solved an empty model."
        )
        return model.t_global
