"""
Heat Source Terms
=================
The right-hand side of the steady heat equation. A source term is chosen once
when the run is configured and handed to the load assembly explicitly.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt
    from heatfem.analysis.node import Node

logger = logging.getLogger(__name__)


class SourceKind(StrEnum):
    CONSTANT = "constant"
    QUADRATIC = "quadratic"


@dataclass(frozen=True)
class SourceTerm(ABC):
    @property
    @abstractmethod
    def kind(self) -> SourceKind:
        pass

    @abstractmethod
    def evaluate(self, node: Node) -> float:
        """Value of the source term at the node."""
        pass


@dataclass(frozen=True)
class ConstantSource(SourceTerm):
    value: float = 0.0

    @property
    def kind(self) -> SourceKind: return SourceKind.CONSTANT

    def evaluate(self, node: Node) -> float:
        return self.value


@dataclass(frozen=True)
class QuadraticSource(SourceTerm):
    """f(x, y) = a * x**2 + b * y**2"""
    a: float = 1.0
    b: float = 1.0

    @property
    def kind(self) -> SourceKind: return SourceKind.QUADRATIC

    def evaluate(self, node: Node) -> float:
        return self.a * node.x ** 2 + self.b * node.y ** 2


def source_from_config(kind: str, coefficients: Sequence[float] = ()) -> SourceTerm:
    """
    Build a source term from its kind name and coefficients.

    constant takes zero or one coefficient (the value, default 0), quadratic
    takes zero or two (a and b, default 1 and 1).

    Raises:
        ValueError: If the kind is unknown or the coefficient count does not fit it.
    """
    try:
        source_kind = SourceKind(kind)
    except ValueError as e:
        raise ValueError(
            f"Unknown source term '{kind}'. Use one of: {', '.join(k.value for k in SourceKind)}."
        ) from e

    coefficients = [float(c) for c in coefficients]
    if source_kind == SourceKind.CONSTANT:
        if len(coefficients) > 1:
            raise ValueError(f"Constant source takes one coefficient, got {len(coefficients)}.")
        source = ConstantSource(*coefficients)
    else:
        if len(coefficients) not in (0, 2):
            raise ValueError(f"Quadratic source takes two coefficients (a, b), got {len(coefficients)}.")
        source = QuadraticSource(*coefficients)

    logger.debug(f"Source term configured: {source}")
    return source


def assemble_load_vector(nodes: Sequence[Node], source: SourceTerm) -> npt.NDArray[np.float64]:
    """
    Evaluate the source term at every node.

    Entry i of the result belongs to node i. Boundary rows are kept; the
    reduction step discards them later.
    """
    return np.array([source.evaluate(node) for node in nodes], dtype=np.float64)
