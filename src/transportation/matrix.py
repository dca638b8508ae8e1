"""
Dense numeric matrix used by the transportation table.

The matrix is a thin wrapper around a 2-D numpy array. The scalar type is the
array dtype, so the same class serves integer cost tables, float instances
and exact ``Fraction`` systems (``dtype=object``).
"""

from fractions import Fraction
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .exceptions import DimensionMismatch, IndexOutOfBounds, MalformedInput, SingularMatrix


def exact_cast(values: Any, dtype: Any) -> np.ndarray:
    """
    Convert values to an array of ``dtype`` without changing any of them.

    Args:
        values: Nested sequence or numpy array
        dtype: Target scalar type

    Returns:
        The converted array

    Raises:
        MalformedInput: If a value cannot be stored exactly in dtype
    """
    dtype = np.dtype(dtype)
    try:
        array = np.array(values, dtype=dtype)
    except (ValueError, TypeError, OverflowError) as e:
        raise MalformedInput(f"Values cannot be stored as {dtype}: {e}") from e
    if dtype == np.dtype(object):
        return array

    source = np.asarray(values)
    if source.dtype != np.dtype(object) and np.can_cast(source.dtype, dtype, 'safe'):
        return array
    changed = source.astype(object) != array.astype(object)
    if np.any(changed):
        index = tuple(np.argwhere(changed)[0])
        raise MalformedInput(f"Value {source[index]!r} cannot be stored exactly as {dtype}")
    return array


class Matrix:
    """
    Rectangular grid of numbers with fixed dimensions.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        data: Underlying numpy array (shape ``(rows, cols)``)
    """

    def __init__(self, data: Any, dtype: Any = None) -> None:
        """
        Build a matrix from a rectangular grid.

        Args:
            data: Nested sequence, 2-D numpy array or another Matrix
            dtype: Scalar type of the cells (inferred when None)

        Raises:
            DimensionMismatch: If rows differ in length or data is not 2-D
            MalformedInput: If a cell cannot be stored exactly in dtype
        """
        if isinstance(data, Matrix):
            data = data.data

        if isinstance(data, np.ndarray):
            array = np.array(data) if dtype is None else exact_cast(data, dtype)
            if array.ndim != 2:
                raise DimensionMismatch(f"Expected a 2-D array, got {array.ndim} dimension(s)")
        else:
            grid = [list(row) for row in data]
            widths = {len(row) for row in grid}
            if len(widths) > 1:
                raise DimensionMismatch(f"Rows have differing lengths: {sorted(widths)}")
            if not grid:
                array = np.zeros((0, 0), dtype=np.int64 if dtype is None else dtype)
            else:
                array = np.array(grid) if dtype is None else exact_cast(grid, dtype)
                if array.ndim != 2:
                    raise DimensionMismatch(f"Cells must be scalars, got a {array.ndim}-D grid")

        self._data = array

    @classmethod
    def new_empty(cls, n: int, m: int, dtype: Any = np.int64) -> "Matrix":
        """Create an n x m matrix filled with the zero value of dtype."""
        if n < 0 or m < 0:
            raise DimensionMismatch(f"Negative dimensions: {n}x{m}")
        if np.dtype(dtype) == np.dtype(object):
            return cls(np.full((n, m), 0, dtype=object))
        return cls(np.zeros((n, m), dtype=dtype))

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def data(self) -> np.ndarray:
        return self._data

    def to_list(self) -> List[List[Any]]:
        return self._data.tolist()

    def is_square(self) -> bool:
        return self.rows == self.cols

    def is_empty(self) -> bool:
        return self.rows == 0 or self.cols == 0

    def iter_rows(self) -> Iterator[List[Any]]:
        for i in range(self.rows):
            yield self._data[i, :].tolist()

    def iter_cols(self) -> Iterator[List[Any]]:
        for j in range(self.cols):
            yield self._data[:, j].tolist()

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexOutOfBounds(f"Index ({i}, {j}) outside {self.rows}x{self.cols} matrix")

    def get(self, i: int, j: int) -> Any:
        self._check_index(i, j)
        return self._data[i, j]

    def set(self, i: int, j: int, value: Any) -> None:
        self._check_index(i, j)
        self._data[i, j] = value

    def __getitem__(self, index: Tuple[int, int]) -> Any:
        i, j = index
        return self.get(i, j)

    def __setitem__(self, index: Tuple[int, int], value: Any) -> None:
        i, j = index
        self.set(i, j, value)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def transpose(self) -> "Matrix":
        return Matrix(self._data.T.copy())

    def _require_same_shape(self, other: "Matrix", op: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatch(f"Cannot {op} {self.rows}x{self.cols} and {other.rows}x{other.cols} matrices")

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "add")
        return Matrix(self._data + other._data)

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "subtract")
        return Matrix(self._data - other._data)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.cols != other.rows:
            raise DimensionMismatch(f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}")
        return Matrix(self._data @ other._data)

    def __mul__(self, other: Any) -> "Matrix":
        if isinstance(other, Matrix):
            return self.__matmul__(other)
        return Matrix(self._data * other)

    def __rmul__(self, other: Any) -> "Matrix":
        return Matrix(other * self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return False
        return self.shape == other.shape and bool(np.all(self._data == other._data))

    __hash__ = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def min(self) -> Optional[Any]:
        """Smallest cell value, or None for an empty matrix."""
        if self.is_empty():
            return None
        return self._data.min()

    def index_of(self, value: Any) -> Optional[Tuple[int, int]]:
        """First (row, col) in row-major order holding ``value``."""
        for i in range(self.rows):
            for j in range(self.cols):
                if self._data[i, j] == value:
                    return i, j
        return None

    def argmin(self) -> Optional[Tuple[Any, Tuple[int, int]]]:
        """Return ``(min_value, (row, col))`` or None for an empty matrix."""
        value = self.min()
        if value is None:
            return None
        return value, self.index_of(value)

    # ------------------------------------------------------------------
    # Linear systems
    # ------------------------------------------------------------------

    def solve(self, b: Sequence[Any], scalar: Any = Fraction, tolerance: float = 0) -> List[Any]:
        """
        Solve ``A x = b`` by Gaussian elimination with partial pivoting.

        The system is assembled in ``scalar`` rather than the matrix dtype,
        since elimination needs division and negative intermediate values.
        With the default ``Fraction`` the result is exact.

        Args:
            b: Right-hand side, one value per row
            scalar: Callable converting a number into the working type
            tolerance: Pivots with absolute value at or below this are zero

        Returns:
            Solution vector of length ``cols``

        Raises:
            DimensionMismatch: If the matrix is not square or b has the wrong length
            SingularMatrix: If no usable pivot exists for some column
        """
        if not self.is_square():
            raise DimensionMismatch(f"solve() needs a square matrix, got {self.rows}x{self.cols}")
        rhs = np.asarray(b, dtype=object).tolist()
        if len(rhs) != self.rows:
            raise DimensionMismatch(f"Right-hand side has length {len(rhs)}, expected {self.rows}")

        size = self.rows
        augmented = np.empty((size, size + 1), dtype=object)
        for i, row in enumerate(self.to_list()):
            augmented[i, :size] = [scalar(v) for v in row]
            augmented[i, size] = scalar(rhs[i])

        for col in range(size):
            # max() keeps the earliest row on ties
            pivot_row = max(range(col, size), key=lambda r: abs(augmented[r, col]))
            if pivot_row != col:
                augmented[[col, pivot_row]] = augmented[[pivot_row, col]]

            pivot = augmented[col, col]
            if abs(pivot) <= tolerance:
                raise SingularMatrix(f"Matrix is singular (zero pivot in column {col})")

            for r in range(col + 1, size):
                factor = augmented[r, col] / pivot
                if factor != 0:
                    augmented[r, col:] = augmented[r, col:] - factor * augmented[col, col:]

        solution: List[Any] = [scalar(0)] * size
        for i in reversed(range(size)):
            acc = augmented[i, size]
            for k in range(i + 1, size):
                acc = acc - augmented[i, k] * solution[k]
            solution[i] = acc / augmented[i, i]
        return solution

    def __str__(self) -> str:
        return "\n".join(" ".join(str(v) for v in row) for row in self.to_list())

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.cols}, dtype={self.dtype})"
