from __future__ import annotations

import logging
import os
from datetime import datetime

import numpy as np
import matplotlib.pyplot as plt

from heatfem.analysis.node import Node
from heatfem.analysis.finite_elements import ELEMENT_CLASS_MAP, ElementType, FiniteElement, Tri3
from heatfem.errors import MalformedMeshError

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Recognized entities that never become element records
IGNORED_ELEMENT_TYPES = {ElementType.POINT, ElementType.EDGE}


class Mesh:
    def __init__(
        self,
        nodes: list[Node],
        elements: list[FiniteElement],
        filename: str | None = None,
    ) -> None:
        """
        Initialize the Mesh class.

        Args:
            nodes: Nodes of the mesh; their indices must be exactly 0..N-1.
            elements: Elements in mesh order; every node index must reference a node.
            filename: Source file, if the mesh was read from one.

        Raises:
            MalformedMeshError: If node indices have gaps or elements reference unknown nodes.
        """
        nodes = sorted(nodes, key=lambda node: node.uid)
        uids = [node.uid for node in nodes]
        if uids != list(range(len(nodes))):
            raise MalformedMeshError(
                f"Node indices must be the contiguous range 0..{len(nodes) - 1}."
            )
        for element in elements:
            if element.global_dofs.size and (
                element.global_dofs.min() < 0 or element.global_dofs.max() >= len(nodes)
            ):
                raise MalformedMeshError(
                    f"Element {element.id} references nodes {element.node_ids} outside 0..{len(nodes) - 1}."
                )

        self.nodes = nodes
        self.elements = list(elements)
        self.filename = filename

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(nodes={self.number_of_nodes}, "
                f"elements={self.number_of_elements}, filename={self.filename!r})")

    @classmethod
    def from_file(cls, filename: str) -> Mesh:
        """
        Load nodes and elements from a gmsh mesh file.

        Node tags and element connectivity are converted from gmsh's 1-based ids to
        0-based indices here and nowhere else. Points and edges are skipped, and the
        remaining elements are numbered 0..E-1 in element-tag order.

        Raises:
            FileNotFoundError: If the file does not exist or cannot be read.
            MalformedMeshError: If gmsh cannot read the file, the node or element section is
                missing or empty, no surface element is stored, or the contents are inconsistent.
        """
        if not os.path.isfile(filename) or not os.access(filename, os.R_OK):
            logger.error(f"Mesh file does not exist or cannot be read: '{filename}'")
            raise FileNotFoundError(f"Mesh file does not exist or cannot be read: '{filename}'")

        logger.info(f"Loading mesh from: {filename}")
        import gmsh

        gmsh.initialize()
        try:
            gmsh.option.set_number("General.Terminal", 0)
            try:
                gmsh.open(filename)
            except Exception as e:
                raise MalformedMeshError(f"gmsh could not read '{filename}': {e}") from e

            nodes = cls._read_nodes(filename)
            nodes_lookup = {node.uid: node for node in nodes}
            records = cls._read_element_records()
        finally:
            gmsh.finalize()

        if not records:
            raise MalformedMeshError(f"Mesh file '{filename}' has no elements section or it is empty.")

        elements: list[FiniteElement] = []
        n_ignored = 0
        unsupported: set[int] = set()
        for element_tag, element_type, node_tags in records:
            if element_type not in ELEMENT_CLASS_MAP:
                if element_type not in IGNORED_ELEMENT_TYPES:
                    unsupported.add(element_type)
                n_ignored += 1
                continue

            zero_based = node_tags - 1  # GMSH uses 1-based indexing, convert to 0-based
            try:
                element_nodes = [nodes_lookup[int(tag)] for tag in zero_based]
            except KeyError as e:
                raise MalformedMeshError(
                    f"Element {element_tag} references node {int(e.args[0]) + 1} which is not in the node section."
                ) from e

            element_class = ELEMENT_CLASS_MAP[element_type]
            elements.append(element_class(index=len(elements), nodes=element_nodes))

        if not elements:
            raise MalformedMeshError(
                f"Mesh file '{filename}' holds only point and edge elements (or unsupported types), no surface elements."
            )

        logger.info(
            f"Mesh loaded: {len(nodes)} nodes, {len(elements)} elements "
            f"({n_ignored} point/edge or unsupported entities skipped)."
        )
        if unsupported:
            logger.warning(f"Unsupported gmsh element types {sorted(unsupported)} were ignored.")
        return cls(nodes=nodes, elements=elements, filename=filename)

    @staticmethod
    def _read_nodes(filename: str) -> list[Node]:
        """Read every node once, placing it at its 0-based tag."""
        import gmsh

        node_tags, flat_coords, _ = gmsh.model.mesh.get_nodes()
        if len(node_tags) == 0:
            raise MalformedMeshError(f"Mesh file '{filename}' has no nodes section or it is empty.")

        coords = np.asarray(flat_coords, dtype=np.float64).reshape(-1, 3)  # (num_nodes, 3)
        zero_based_tags = np.asarray(node_tags, dtype=np.int64) - 1

        n_nodes = len(zero_based_tags)
        if np.unique(zero_based_tags).size != n_nodes or zero_based_tags.max() != n_nodes - 1:
            raise MalformedMeshError(
                f"Node tags in '{filename}' must be the contiguous range 1..{n_nodes}."
            )

        # Use only x and y coordinates
        return [Node(index=int(tag), coords=xy) for tag, xy in zip(zero_based_tags, coords[:, :2])]

    @staticmethod
    def _read_element_records() -> list[tuple[int, int, npt.NDArray[np.int64]]]:
        """Collect (element tag, gmsh type, 1-based node tags) for every element, sorted by tag."""
        import gmsh

        records: list[tuple[int, int, npt.NDArray[np.int64]]] = []

        for dim, entity_tag in gmsh.model.get_entities():
            element_types, element_tags_list, node_tags = gmsh.model.mesh.get_elements(dim, entity_tag)

            for element_type, element_tags, flat_node_tags in zip(element_types, element_tags_list, node_tags):
                if len(element_tags) == 0:
                    continue
                connectivity = np.asarray(flat_node_tags, dtype=np.int64).reshape(len(element_tags), -1)
                for element_tag, element_node_tags in zip(element_tags, connectivity):
                    records.append((int(element_tag), int(element_type), element_node_tags))

        records.sort(key=lambda record: record[0])
        return records

    @property
    def number_of_nodes(self) -> int:
        """Return the number of nodes in the mesh."""
        return len(self.nodes)

    @property
    def number_of_elements(self) -> int:
        """Return the number of stored elements in the mesh."""
        return len(self.elements)

    @property
    def triangles(self) -> list[Tri3]:
        """Linear triangles, in mesh order."""
        return [element for element in self.elements if isinstance(element, Tri3)]

    @property
    def max_nodes_per_element(self) -> int:
        """Return the maximum number of nodes per element in the mesh."""
        if not self.elements:
            return 0
        return max(element.number_of_nodes for element in self.elements)

    @property
    def coordinates(self) -> npt.NDArray[np.float64]:
        """(N, 2) array of node coordinates, row i for node i."""
        return np.array([node.coords for node in self.nodes]).reshape(-1, 2)

    def plot(self) -> None:
        """Plot the mesh with node and element numbers."""
        plt.rcParams["figure.constrained_layout.use"] = True
        plt.figure()

        plt.axis('equal')

        for element in self.elements:
            # Only the corner nodes outline the element
            corners = element.nodes[:3] if element.number_of_nodes in (3, 6) else element.nodes[:4]
            coords = np.array([node.coords for node in corners])
            coords = np.vstack((coords, coords[0]))  # Close the polygon

            plt.fill(coords[:, 0], coords[:, 1], color='tab:blue', lw=1, alpha=0.1)
            plt.plot(coords[:, 0], coords[:, 1], color='black', lw=1)

            centroid = np.mean(coords[:-1], axis=0)
            plt.text(centroid[0], centroid[1], str(element.id), fontsize=12, color='tab:blue',
                     ha='center', va='center')

        for node in self.nodes:
            plt.plot(node.x, node.y, 'ko')
            plt.text(node.x, node.y, str(node.uid), fontsize=12, color='k', ha='left', va='bottom')

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.minorticks_on()
        plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.title(f"Mesh plotted at {datetime.now().strftime('%d.%m.%Y %H:%M:%S')}")
        plt.xlabel("X Coordinate")
        plt.ylabel("Y Coordinate")
        plt.show()
