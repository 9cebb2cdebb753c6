"""
Rectangle Mesh Generator
========================
Builds structured triangle meshes of a rectangle with gmsh, together with a
boundary file prescribing a value on every node of the rectangle outline.
Used for the bundled sample and for manufactured-solution checks.
"""
from __future__ import annotations

import logging
from typing import Callable


logger = logging.getLogger(__name__)


def write_rectangle_mesh(
    filename: str,
    width: float = 1.0,
    height: float = 1.0,
    n_x: int = 4,
    n_y: int = 4,
    boundary_filename: str | None = None,
    boundary_value: Callable[[float, float], float] | None = None,
) -> None:
    """
    Mesh [0, width] x [0, height] with n_x by n_y cells, each split into two triangles.

    Args:
        filename: Output .msh file (gmsh 4.1 ASCII).
        width: Rectangle size along x.
        height: Rectangle size along y.
        n_x: Number of cells along x.
        n_y: Number of cells along y.
        boundary_filename: If given, also write a boundary file for the outline nodes.
        boundary_value: Prescribed value g(x, y) for the boundary file, zero when omitted.
    """
    if n_x < 1 or n_y < 1:
        raise ValueError(f"Need at least one cell per direction, got n_x={n_x}, n_y={n_y}.")

    import gmsh

    gmsh.initialize()
    try:
        gmsh.option.set_number("General.Terminal", 0)
        gmsh.model.add("rectangle")

        gmsh.model.geo.add_point(0, 0, 0, tag=1)
        gmsh.model.geo.add_point(width, 0, 0, tag=2)
        gmsh.model.geo.add_point(width, height, 0, tag=3)
        gmsh.model.geo.add_point(0, height, 0, tag=4)

        gmsh.model.geo.add_line(1, 2, 1)
        gmsh.model.geo.add_line(2, 3, 2)
        gmsh.model.geo.add_line(3, 4, 3)
        gmsh.model.geo.add_line(4, 1, 4)

        # Transfinite curves take the number of nodes, not cells
        for line, n_cells in zip([1, 2, 3, 4], [n_x, n_y, n_x, n_y]):
            gmsh.model.geo.mesh.set_transfinite_curve(line, n_cells + 1)

        gmsh.model.geo.add_curve_loop([1, 2, 3, 4], 1)
        gmsh.model.geo.add_plane_surface([1], 1)
        gmsh.model.geo.mesh.set_transfinite_surface(1, "Left", [1, 2, 3, 4])

        gmsh.model.geo.synchronize()
        gmsh.model.mesh.generate(2)
        gmsh.model.mesh.renumber_nodes()

        gmsh.option.set_number("Mesh.MshFileVersion", 4.1)
        gmsh.option.set_number("Mesh.SaveAll", 1)
        gmsh.write(filename)
        logger.info(f"Rectangle mesh ({n_x}x{n_y} cells) written to: {filename}")

        if boundary_filename is not None:
            outline: dict[int, tuple[float, float]] = {}
            for line in [1, 2, 3, 4]:
                node_tags, flat_coords, _ = gmsh.model.mesh.get_nodes(1, line, includeBoundary=True)
                for tag, xyz in zip(node_tags, flat_coords.reshape(-1, 3)):
                    outline.setdefault(int(tag), (float(xyz[0]), float(xyz[1])))
            _write_boundary_file(boundary_filename, outline, boundary_value)
    finally:
        gmsh.finalize()


def _write_boundary_file(
    filename: str,
    outline: dict[int, tuple[float, float]],
    boundary_value: Callable[[float, float], float] | None,
) -> None:
    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"{len(outline)}\n")
        for tag, (x, y) in outline.items():
            value = float(boundary_value(x, y)) if boundary_value is not None else 0.0
            f.write(f"{tag} {value!r}\n")
    logger.info(f"Boundary file with {len(outline)} nodes written to: {filename}")
