from heatfem.analysis.node import Node
from heatfem.analysis.finite_elements import ElementType, FiniteElement, Tri3
from heatfem.analysis.model import Model

__all__ = ["ElementType", "FiniteElement", "Model", "Node", "Tri3"]
