"""
Dirichlet Boundary Specification
================================
Reads the prescribed node values and partitions the mesh nodes into boundary
(known value) and interior (unknown) sets.

File format::

    B
    <node id> <value>
    ...            (B records, node ids are 1-based as in the mesh file)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

import numpy as np

from heatfem.errors import InvalidBoundarySpecError, MalformedBoundaryError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundarySpec:
    """Prescribed values in input order, node ids still 1-based."""
    node_ids: tuple[int, ...]
    values: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.node_ids) != len(self.values):
            raise MalformedBoundaryError(
                f"{len(self.node_ids)} node ids but {len(self.values)} values."
            )

    def __len__(self) -> int:
        return len(self.node_ids)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, float]]) -> BoundarySpec:
        pairs = list(pairs)
        return cls(
            node_ids=tuple(int(node_id) for node_id, _ in pairs),
            values=tuple(float(value) for _, value in pairs),
        )

    @classmethod
    def from_file(cls, filename: str) -> BoundarySpec:
        """
        Parse a boundary specification file.

        Raises:
            FileNotFoundError: If the file does not exist or cannot be read.
            MalformedBoundaryError: If the header or a record cannot be parsed,
                or the number of records differs from the header count.
        """
        if not os.path.isfile(filename):
            logger.error(f"Boundary file does not exist: '{filename}'")
            raise FileNotFoundError(f"Boundary file does not exist with name '{filename}'")

        logger.info(f"Loading boundary specification from: {filename}")
        try:
            with open(filename, "r", encoding="utf-8") as f:
                lines = [(number, line.split()) for number, line in enumerate(f, start=1) if line.strip()]
        except OSError as e:
            logger.error(f"Boundary file cannot be read: '{filename}'")
            raise FileNotFoundError(f"Boundary file cannot be read: '{filename}' ({e})") from e

        if not lines:
            raise MalformedBoundaryError(f"Boundary file '{filename}' is empty.")

        header_line, header = lines[0]
        if len(header) != 1:
            raise MalformedBoundaryError(
                f"{filename}:{header_line}: expected the boundary node count, got {' '.join(header)!r}."
            )
        try:
            count = int(header[0])
        except ValueError as e:
            raise MalformedBoundaryError(
                f"{filename}:{header_line}: boundary node count {header[0]!r} is not an integer."
            ) from e
        if count < 0:
            raise MalformedBoundaryError(f"{filename}:{header_line}: negative boundary node count {count}.")

        pairs: list[tuple[int, float]] = []
        for line_number, fields in lines[1:]:
            if len(fields) != 2:
                raise MalformedBoundaryError(
                    f"{filename}:{line_number}: expected '<node id> <value>', got {' '.join(fields)!r}."
                )
            try:
                pairs.append((int(fields[0]), float(fields[1])))
            except ValueError as e:
                raise MalformedBoundaryError(
                    f"{filename}:{line_number}: cannot parse {' '.join(fields)!r}."
                ) from e

        if len(pairs) != count:
            raise MalformedBoundaryError(
                f"Boundary file '{filename}' declares {count} nodes but lists {len(pairs)}."
            )

        return cls.from_pairs(pairs)


@dataclass(frozen=True, eq=False)
class Classification:
    """
    Partition of the node range [0, N) into boundary and interior nodes.

    boundary_values[i] belongs to boundary_nodes[i] (input order);
    interior_nodes is strictly ascending. Position i in interior_nodes is row i
    of the reduced system.
    """
    total_node_count: int
    boundary_nodes: npt.NDArray[np.int64]
    boundary_values: npt.NDArray[np.float64]
    interior_nodes: npt.NDArray[np.int64] = field(repr=False)

    def __post_init__(self) -> None:
        # Stored arrays are private read-only copies
        for name, dtype in (('boundary_nodes', np.int64), ('boundary_values', np.float64), ('interior_nodes', np.int64)):
            array = np.array(getattr(self, name), dtype=dtype)
            array.flags.writeable = False
            object.__setattr__(self, name, array)

    @property
    def number_of_boundary_nodes(self) -> int:
        return int(self.boundary_nodes.size)

    @property
    def number_of_interior_nodes(self) -> int:
        return int(self.interior_nodes.size)


def fill_interior_gaps(sorted_boundary: list[int], total_node_count: int) -> list[int]:
    """
    Every index of [0, total_node_count) that is not in sorted_boundary, ascending.

    Walks the gaps before the first boundary index, between consecutive ones,
    and after the last one up to total_node_count - 1.
    """
    interior: list[int] = []
    start = 0
    for boundary_index in sorted_boundary:
        interior.extend(range(start, boundary_index))
        start = boundary_index + 1
    interior.extend(range(start, total_node_count))
    return interior


def classify(boundary_spec: BoundarySpec, total_node_count: int) -> Classification:
    """
    Split the mesh nodes into boundary and interior sets.

    Args:
        boundary_spec: Prescribed values with 1-based node ids, in input order.
        total_node_count: Number of nodes N in the mesh.

    Raises:
        InvalidBoundarySpecError: If a node id is outside 1..N or listed twice.
    """
    boundary = [node_id - 1 for node_id in boundary_spec.node_ids]  # 1-based ids to 0-based indices

    out_of_range = [index + 1 for index in boundary if not 0 <= index < total_node_count]
    if out_of_range:
        raise InvalidBoundarySpecError(
            f"Boundary node ids {out_of_range} are outside 1..{total_node_count}."
        )

    sorted_boundary = sorted(boundary)
    duplicates = sorted({a + 1 for a, b in zip(sorted_boundary, sorted_boundary[1:]) if a == b})
    if duplicates:
        raise InvalidBoundarySpecError(f"Boundary node ids {duplicates} are listed more than once.")

    interior = fill_interior_gaps(sorted_boundary, total_node_count)

    logger.info(f"Classified {total_node_count} nodes: {len(boundary)} boundary, {len(interior)} interior.")
    return Classification(
        total_node_count=total_node_count,
        boundary_nodes=np.array(boundary, dtype=np.int64),
        boundary_values=np.array(boundary_spec.values, dtype=np.float64),
        interior_nodes=np.array(interior, dtype=np.int64),
    )
