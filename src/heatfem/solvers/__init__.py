from heatfem.solvers.solver import Solver, back_substitute, reduce_system, solve_reduced

__all__ = ["Solver", "back_substitute", "reduce_system", "solve_reduced"]
