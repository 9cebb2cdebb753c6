from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


class Node:
    """
    Represents a mesh node of the heat diffusion problem.
    """
    def __init__(
        self,
        index: int,
        coords: list[float] | npt.NDArray[np.float64],
    ) -> None:
        """
        Initialize the node with coordinates.

        Args:
            index: Zero-based node index, also the node's row in the global system.
            coords: Coordinates of the node in the global system [X, Y].
        """
        self.coords = np.array(coords, dtype=np.float64)
        if self.coords.shape != (2,):
            raise ValueError(f"Node {index} needs exactly two coordinates, got {self.coords.shape}.")
        self.coords.flags.writeable = False
        self.uid = int(index)

    def __repr__(self) -> str:
        """String representation of the node."""
        return f"{self.__class__.__name__}(id={self.uid}, coords={self.coords})"

    @property
    def x(self) -> float:
        """X-coordinate of the node."""
        return float(self.coords[0])

    @property
    def y(self) -> float:
        """Y-coordinate of the node."""
        return float(self.coords[1])
