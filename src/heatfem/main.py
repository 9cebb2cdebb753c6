"""
Command-Line Entry Point
========================
Wires the pipeline together: load mesh and boundary values, assemble, reduce,
solve, and hand the field to the output writers.

Usage:
    $ python -m heatfem mesh.msh boundary.txt --source quadratic --coefficients 0 3
    $ python -m heatfem                # bundled unit-square sample
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from heatfem.analysis.model import Model
from heatfem.config import (
    DEFAULT_RESULTS_FILENAME,
    DEFAULT_SOURCE_COEFFICIENTS,
    DEFAULT_SOURCE_KIND,
    SAMPLE_BOUNDARY_PATH,
    SAMPLE_MESH_PATH,
    RunConfig,
)
from heatfem.errors import HeatFemError
from heatfem.logging_config import setup_logging
from heatfem.post.results import element_vertex_samples, plot_solution, write_gnuplot_results, write_vtu
from heatfem.pre.boundary import BoundarySpec
from heatfem.pre.mesh import Mesh
from heatfem.pre.source import SourceKind, source_from_config
from heatfem.solvers.solver import Solver

logger = logging.getLogger(__name__)


def run(config: RunConfig) -> Model:
    """Solve one problem and write its outputs. Any error aborts the run."""
    mesh = Mesh.from_file(config.mesh_path)
    boundary = BoundarySpec.from_file(config.boundary_path)

    model = Model(mesh=mesh, boundary=boundary, source=config.source)
    Solver(model).solve()

    samples = element_vertex_samples(mesh, model.t_global)
    write_gnuplot_results(config.results_path, samples, tex_name=config.tex_name)

    if config.vtu_path:
        write_vtu(config.vtu_path, mesh, model.t_global)
    if config.plot:
        plot_solution(mesh, model.t_global)
    return model


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heatfem",
        description="Steady 2D heat diffusion on a gmsh triangle mesh with Dirichlet boundary values.",
    )
    parser.add_argument("mesh", nargs="?", default=SAMPLE_MESH_PATH,
                        help="gmsh .msh file (default: bundled unit-square sample)")
    parser.add_argument("boundary", nargs="?", default=SAMPLE_BOUNDARY_PATH,
                        help="boundary file: count, then '<node id> <value>' lines")
    parser.add_argument("--source", choices=[k.value for k in SourceKind], default=DEFAULT_SOURCE_KIND,
                        help="heat source term (default: %(default)s)")
    parser.add_argument("--coefficients", type=float, nargs="*", default=None,
                        help="source coefficients: value for constant, a b for quadratic")
    parser.add_argument("-o", "--output", default=DEFAULT_RESULTS_FILENAME,
                        help="gnuplot results file (default: %(default)s)")
    parser.add_argument("--vtu", default=None, help="also write the field to this VTU file")
    parser.add_argument("--plot", action="store_true", help="show the field with matplotlib")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    coefficients = args.coefficients
    if coefficients is None:
        coefficients = DEFAULT_SOURCE_COEFFICIENTS if args.source == DEFAULT_SOURCE_KIND else ()

    try:
        config = RunConfig(
            mesh_path=args.mesh,
            boundary_path=args.boundary,
            source=source_from_config(args.source, coefficients),
            results_path=args.output,
            vtu_path=args.vtu,
            plot=args.plot,
        )
        run(config)
    except (HeatFemError, OSError) as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
