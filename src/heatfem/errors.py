"""
Error Taxonomy
==============
Every failure below is unrecoverable for the current run. Nothing is retried;
the error is raised to the caller, which decides how to report it.

The input errors also derive from ``ValueError`` so callers that already guard
parsing with ``except ValueError`` keep working.
"""


class HeatFemError(Exception):
    """Base class for all errors raised by heatfem."""


class MalformedMeshError(HeatFemError, ValueError):
    """The mesh file is structurally invalid (missing sections, bad counts, bad records)."""


class MalformedBoundaryError(HeatFemError, ValueError):
    """The boundary specification file cannot be parsed."""


class InvalidBoundarySpecError(HeatFemError, ValueError):
    """A boundary node id is duplicated or outside the mesh node range."""


class DegenerateElementError(HeatFemError, ValueError):
    """A triangle has zero area, so its stiffness matrix is undefined."""


class SingularSystemError(HeatFemError):
    """The reduced linear system cannot be solved reliably."""
