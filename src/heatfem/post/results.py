"""
Result Output
=============
Turns the solved temperature field into per-triangle vertex samples and writes
them out: a gnuplot data/script file, a VTU file for ParaView, or a matplotlib figure.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
import meshio

from heatfem.config import RESULTS_NUMBER_FORMAT

if TYPE_CHECKING:
    import numpy.typing as npt
    from heatfem.pre.mesh import Mesh

logger = logging.getLogger(__name__)

GNUPLOT_SCRIPT = """
set term epslatex size 5.5,4
set output "{tex_name}.tex"

unset key
set xlabel "$x$"
set ylabel "$y$"
set zlabel "heat ($u$)" rotate by 90
set title "Result of Heat Problem"

splot $map with lines

unset output
"""


def _check_field(mesh: Mesh, u: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    u = np.asarray(u, dtype=np.float64)
    if u.shape != (mesh.number_of_nodes,):
        raise ValueError(f"Field has shape {u.shape}, mesh has {mesh.number_of_nodes} nodes.")
    return u


def element_vertex_samples(mesh: Mesh, u: npt.NDArray[np.float64]) -> list[npt.NDArray[np.float64]]:
    """
    (x, y, u) at the vertices of every triangle.

    Returns:
        One (4, 3) array per triangle, in mesh order. Rows are vertices 0, 1, 2, 0,
        so each array traces the closed outline of its triangle.
    """
    u = _check_field(mesh, u)
    coords = mesh.coordinates
    samples = []
    for element in mesh.triangles:
        ids = np.append(element.global_dofs, element.global_dofs[0])
        samples.append(np.column_stack((coords[ids], u[ids])))
    return samples


def write_gnuplot_results(
    filename: str,
    samples: list[npt.NDArray[np.float64]],
    tex_name: str,
) -> None:
    """
    Write the samples as an inline gnuplot data block followed by an epslatex splot script.

    Each triangle is a block of four rows followed by two blank lines.
    """
    with open(filename, "w", encoding="utf-8") as f:
        f.write("$map << EOD\n")
        for sample in samples:
            for row in sample:
                f.write(" ".join(RESULTS_NUMBER_FORMAT % value for value in row) + "\n")
            f.write("\n\n")
        f.write("EOD\n")
        f.write(GNUPLOT_SCRIPT.format(tex_name=tex_name))
    logger.info(f"Results written to: {filename}")


def write_vtu(filename: str, mesh: Mesh, u: npt.NDArray[np.float64]) -> None:
    """Write the triangles and the nodal temperature to a VTU file."""
    u = _check_field(mesh, u)
    points = np.column_stack((mesh.coordinates, np.zeros(mesh.number_of_nodes)))
    cells = [("triangle", np.array([element.global_dofs for element in mesh.triangles], dtype=np.int64).reshape(-1, 3))]

    out = meshio.Mesh(points, cells, point_data={"temperature": u})
    meshio.write(filename, out)
    logger.info(f"VTU written to: {filename}")


def plot_solution(mesh: Mesh, u: npt.NDArray[np.float64], show: bool = True) -> plt.Figure:
    """Plot the temperature field over the triangles with element outlines."""
    u = _check_field(mesh, u)
    coords = mesh.coordinates
    triangles = np.array([element.global_dofs for element in mesh.triangles], dtype=np.int64).reshape(-1, 3)

    plt.rcParams["figure.constrained_layout.use"] = True
    fig, ax = plt.subplots()
    ax.set_aspect('equal')

    if len(triangles):
        tpc = ax.tripcolor(coords[:, 0], coords[:, 1], triangles, u, shading='gouraud', cmap='jet')
        fig.colorbar(tpc, ax=ax, label="u")
        ax.triplot(coords[:, 0], coords[:, 1], triangles, color='black', lw=0.5)

    ax.set_title("Result of Heat Problem")
    ax.set_xlabel("X Coordinate")
    ax.set_ylabel("Y Coordinate")
    if show:
        plt.show()
    return fig
