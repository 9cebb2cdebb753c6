"""
Configuration & Path Management
===============================
Central registry for file names, numeric constants and the run configuration
assembled by the command-line interface.

Exports:
    ASSETS_PATH (str): Absolute path to the bundled sample meshes.
    RunConfig: Everything a single solve needs to know.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from heatfem.pre.source import SourceTerm


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to a resource shipped next to the source tree.
    """
    # config.py is in src/heatfem/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_MESH_PATH: str = os.path.join(ASSETS_PATH, "square.msh")
SAMPLE_BOUNDARY_PATH: str = os.path.join(ASSETS_PATH, "square_boundary.txt")

DEFAULT_RESULTS_FILENAME: str = "results.txt"
RESULTS_NUMBER_FORMAT: str = "%.2f"

# Relative tolerance for the Jacobian of a triangle, scaled by its longest edge squared
DEGENERATE_ELEMENT_RTOL: float = 1e-12

DEFAULT_SOURCE_KIND: str = "constant"
DEFAULT_SOURCE_COEFFICIENTS: tuple[float, ...] = (0.0,)


@dataclass
class RunConfig:
    """Inputs and outputs of one steady-state solve."""
    mesh_path: str
    boundary_path: str
    source: SourceTerm
    results_path: str = DEFAULT_RESULTS_FILENAME
    vtu_path: str | None = None
    plot: bool = False

    @property
    def tex_name(self) -> str:
        """Name of the LaTeX figure the gnuplot script renders, derived from the mesh file."""
        return Path(self.mesh_path).stem
