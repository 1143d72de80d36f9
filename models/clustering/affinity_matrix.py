"""
Affinity Matrix Container

Square grid shared by every stage of the Bond Energy Algorithm.
Cells are addressed with 1-based (row, column) coordinates; row 0
is a header that records which original attribute occupies each
column slot. For example

     A1 A2 A3
     10  5  5
      6  9  3
      2  3  5

is stored as

      0  1  2  3
      0 10  5  5
      0  6  9  3
      0  2  3  5

The same type is used for the raw attribute affinity matrix (header
1..N) and for the clustered matrix under construction (header starts
as all zeros, meaning "no attribute placed yet").
"""

import numpy as np
from typing import List, Sequence


def validate_affinity_values(values) -> np.ndarray:
    """
    Check that `values` is a usable attribute affinity matrix.

    Args:
        values: Array-like N x N matrix of non-negative numbers

    Returns:
        The matrix as a numpy array (int64 for integral input, float64 otherwise)

    Raises:
        ValueError: If the matrix is not 2-D, not square, smaller than 2 x 2,
            non-numeric, non-finite, contains negative entries or is too large
            for 64-bit integer bond energies
    """
    try:
        array = np.asarray(values)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Affinity matrix is not numeric: {exc}") from exc

    if array.ndim != 2:
        raise ValueError(f"Affinity matrix must be 2-D, got {array.ndim}-D input")

    n_rows, n_cols = array.shape
    if n_rows != n_cols:
        raise ValueError(f"Affinity matrix must be square, got shape {n_rows}x{n_cols}")
    if n_rows < 2:
        raise ValueError(f"Affinity matrix needs at least 2 attributes, got {n_rows}")

    if array.dtype == bool or not np.issubdtype(array.dtype, np.number):
        try:
            array = array.astype(np.float64)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Affinity matrix is not numeric: {exc}") from exc

    if np.issubdtype(array.dtype, np.complexfloating):
        raise ValueError("Affinity matrix must contain real values")

    if not np.all(np.isfinite(array)):
        raise ValueError("Affinity matrix contains NaN or infinite values")
    if np.any(array < 0):
        raise ValueError("Affinity values must be non-negative")

    if np.issubdtype(array.dtype, np.integer):
        # a bond sums N products of two cells in int64
        largest = int(array.max())
        if largest * largest * n_rows > np.iinfo(np.int64).max:
            raise ValueError(
                f"Affinity values up to {largest} overflow 64-bit bond energies "
                f"for {n_rows} attributes"
            )
        return array.astype(np.int64)
    return array.astype(np.float64)


class AffinityMatrix:
    """
    (N+1) x (N+1) numeric grid with a header row of attribute identities.

    Size is fixed at construction. Out-of-range coordinates raise
    IndexError instead of wrapping around like plain numpy indexing.
    """

    def __init__(self, n: int, dtype=np.int64):
        """
        Args:
            n: Number of attributes (N)
            dtype: Cell type, int64 for integer affinities or float64 for reals
        """
        if n < 1:
            raise ValueError(f"Matrix size must be positive, got {n}")

        self._length = int(n)
        self._grid = np.zeros((self._length + 1, self._length + 1), dtype=dtype)

    @classmethod
    def from_values(cls, values) -> "AffinityMatrix":
        """
        Build the raw affinity matrix with header 1..N.

        Args:
            values: N x N array-like of non-negative affinities

        Returns:
            Populated AffinityMatrix
        """
        array = validate_affinity_values(values)
        n = array.shape[0]

        matrix = cls(n, dtype=array.dtype)
        matrix._grid[1:, 1:] = array
        matrix._grid[0, 1:] = np.arange(1, n + 1)
        return matrix

    @property
    def size(self) -> int:
        return self._length

    @property
    def dtype(self):
        return self._grid.dtype

    @property
    def order(self) -> List[int]:
        """Header row: attribute identity per column slot (0 = empty slot)."""
        return [int(v) for v in self._grid[0, 1:]]

    @property
    def values(self) -> np.ndarray:
        """Copy of the N x N body without the header."""
        return self._grid[1:, 1:].copy()

    def _check_index(self, index: int, axis: str):
        if not 0 <= index <= self._length:
            raise IndexError(
                f"{axis} index {index} out of range [0, {self._length}]"
            )

    def get(self, row: int, col: int):
        self._check_index(row, "row")
        self._check_index(col, "column")
        return self._grid[row, col].item()

    def set(self, row: int, col: int, value):
        self._check_index(row, "row")
        self._check_index(col, "column")
        self._grid[row, col] = value

    def extract_column(self, col: int) -> np.ndarray:
        """
        Copy rows 0..N of a column, header included.

        Args:
            col: Column slot to read

        Returns:
            Array of N+1 values, independent of this matrix
        """
        self._check_index(col, "column")
        return self._grid[:, col].copy()

    def write_column(self, col: int, values: Sequence):
        """
        Overwrite rows 0..N of a column, header included.

        Args:
            col: Column slot to write
            values: Sequence of exactly N+1 values
        """
        self._check_index(col, "column")
        column = np.asarray(values)
        if column.shape != (self._length + 1,):
            raise ValueError(
                f"Column must have {self._length + 1} values, got shape {column.shape}"
            )
        self._grid[:, col] = column

    def shift_columns_right(self, first: int, last: int):
        """
        Move column slots first..last one slot to the right.

        Slot `first` keeps its old content until it is overwritten by
        the caller. Contents and header identities move together.

        Args:
            first: Leftmost slot to move
            last: Rightmost slot to move; last + 1 must still be inside the grid
        """
        if last < first:
            return
        self._check_index(first, "column")
        self._check_index(last + 1, "column")

        for col in range(last + 1, first, -1):
            self.write_column(col, self.extract_column(col - 1))

    def row_slice(self, row: int) -> np.ndarray:
        """Copy of columns 0..N of a row."""
        self._check_index(row, "row")
        return self._grid[row, :].copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, AffinityMatrix):
            return NotImplemented
        return self._length == other._length and np.array_equal(self._grid, other._grid)

    def __repr__(self) -> str:
        return f"AffinityMatrix(size={self._length}, order={self.order})"
