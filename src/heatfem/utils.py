from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def assemble_subarray_at_indices(
    array: npt.NDArray[np.float64],
    subarray: npt.NDArray[np.float64],
    indices: Sequence[int] | npt.NDArray[np.int64],
) -> None:
    """
    Add a small square matrix into a larger one at the rows and columns given by indices.

    This method modifies the larger array in-place. Entries are accumulated, never
    overwritten, so several elements sharing a node pair all contribute to that cell.

    :var array: The larger (N x N) array, modified in-place.
    :var subarray: A smaller (n x n) array whose values are added to the larger array.
    :var indices: n row/column indices of the larger array, in the order of the subarray rows.

    :return: None. The operation modifies the 'array' argument in-place.

    **Example**:

        large_array = np.zeros((4, 4))
        small_array = np.array([[1, 2], [3, 4]])
        indices = [1, 2]
        assemble_subarray_at_indices(large_array, small_array, indices)
        print(large_array)
        # Output:
        # [[0. 0. 0. 0.]
        # [0. 1. 2. 0.]
        # [0. 3. 4. 0.]
        # [0. 0. 0. 0.]]
    """
    indices = np.asarray(indices, dtype=np.int64)
    rows = np.repeat(indices, indices.size)
    cols = np.tile(indices, indices.size)
    # np.add.at accumulates repeated (row, col) pairs instead of keeping the last write
    np.add.at(array, (rows, cols), np.asarray(subarray, dtype=np.float64).ravel())
