"""
Tensor abstraction for the forwardnet package.
Provides an immutable, NumPy-backed 2-D tensor used as the unit of data between layers.
"""

import numpy as np
from typing import Optional, Union, Tuple, List, Sequence

from ..errors import ShapeError, EmptyTensorError, ShapeMismatchError


class Tensor:
    """
    A 2-D tensor of float64 values (rows x columns).

    Every operation returns a new Tensor; the wrapped array is a private,
    read-only copy, so a Tensor never changes after construction.
    """

    def __init__(self, data: Union['Tensor', np.ndarray, Sequence[Sequence[float]]]):
        """
        Initialize a tensor.

        Args:
            data: A nested list/tuple of rows, a 2-D numpy array or another Tensor

        Raises:
            TypeError: If the data is not numeric
            ShapeError: If the data is not 2-D or its rows differ in length
            EmptyTensorError: If the tensor would have no rows or no columns
        """
        if isinstance(data, Tensor):
            array = data.data
        elif isinstance(data, np.ndarray):
            array = data
        elif isinstance(data, (list, tuple)):
            if len(data) == 0:
                raise EmptyTensorError("Tensor must have at least one row")
            lengths = {len(row) if isinstance(row, (list, tuple, np.ndarray)) else -1
                       for row in data}
            if -1 in lengths:
                raise ShapeError("Tensor data must be a sequence of rows")
            if len(lengths) > 1:
                raise ShapeError(f"All rows must have the same length, got lengths {sorted(lengths)}")
            array = np.array(data)
        else:
            raise TypeError(f"Unsupported data type: {type(data)}")

        if array.dtype == object or not (np.issubdtype(array.dtype, np.number)
                                         or np.issubdtype(array.dtype, np.bool_)):
            raise TypeError(f"Tensor data must be numeric, got dtype {array.dtype}")
        if np.issubdtype(array.dtype, np.complexfloating):
            raise TypeError(f"Tensor data must be real, got dtype {array.dtype}")
        if array.ndim != 2:
            raise ShapeError(f"Tensor must be 2-D, got {array.ndim}-D data")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise EmptyTensorError(f"Tensor must not be empty, got shape {array.shape}")

        self._data = np.array(array, dtype=np.float64)
        self._data.flags.writeable = False

    @classmethod
    def row(cls, values: Union[np.ndarray, Sequence[float]]) -> 'Tensor':
        """Create a 1 x N tensor from a flat sequence of values."""
        return cls(np.asarray(values, dtype=np.float64).reshape(1, -1))

    @property
    def data(self) -> np.ndarray:
        """The underlying read-only array."""
        return self._data

    @property
    def shape(self) -> Tuple[int, int]:
        """Return (rows, columns)."""
        rows, cols = self._data.shape
        return int(rows), int(cols)

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    @property
    def size(self) -> int:
        """Return the total number of elements."""
        return int(self._data.size)

    def numpy(self) -> np.ndarray:
        """Return a writable copy of the underlying array."""
        return self._data.copy()

    def tolist(self) -> List[List[float]]:
        return self._data.tolist()

    def add(self, other: 'Tensor') -> 'Tensor':
        """
        Elementwise sum.

        Raises:
            ShapeMismatchError: If the shapes are not identical
        """
        if not isinstance(other, Tensor):
            raise TypeError(f"Cannot add Tensor and {type(other).__name__}")
        if self.shape != other.shape:
            raise ShapeMismatchError(
                f"Cannot add tensors of shape {self.shape} and {other.shape}"
            )
        return Tensor(self._data + other._data)

    def dot(self, other: 'Tensor') -> 'Tensor':
        """
        Matrix multiplication, result shape is (self.rows, other.cols).

        Raises:
            ShapeMismatchError: If self.cols != other.rows
        """
        if not isinstance(other, Tensor):
            raise TypeError(f"Cannot multiply Tensor and {type(other).__name__}")
        if self.cols != other.rows:
            raise ShapeMismatchError(
                f"Cannot multiply tensors of shape {self.shape} and {other.shape}: "
                f"inner dimensions {self.cols} and {other.rows} differ"
            )
        return Tensor(np.matmul(self._data, other._data))

    def flatten(self) -> np.ndarray:
        """Concatenate the rows in order into a 1-D array of length rows * cols."""
        return self._data.reshape(-1).copy()

    def reshape(self, rows: int, cols: int) -> 'Tensor':
        """Reshape the tensor, keeping row-major element order."""
        if rows * cols != self.size:
            raise ShapeMismatchError(
                f"Cannot reshape tensor of shape {self.shape} into ({rows}, {cols})"
            )
        return Tensor(self._data.reshape(rows, cols))

    def allclose(self, other: Union['Tensor', np.ndarray, Sequence[Sequence[float]]],
                 rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Return True if both tensors have the same shape and close values."""
        other = other if isinstance(other, Tensor) else Tensor(other)
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __add__(self, other: 'Tensor') -> 'Tensor':
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.add(other)

    def __matmul__(self, other: 'Tensor') -> 'Tensor':
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.dot(other)

    def __getitem__(self, key):
        """Index like a 2-D array; scalars come back as Python floats."""
        result = self._data[key]
        if np.ndim(result) == 0:
            return float(result)
        return result.copy()

    def __len__(self) -> int:
        return self.rows

    def __repr__(self) -> str:
        return f"Tensor({self._data.tolist()})"

    def __str__(self) -> str:
        return "\n".join(" ".join(f"{value:g}" for value in row) for row in self._data)


# Utility functions for tensor creation
def zeros(rows: int, cols: int) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor(np.zeros((rows, cols)))


def ones(rows: int, cols: int) -> Tensor:
    """Create a tensor filled with ones."""
    return Tensor(np.ones((rows, cols)))


def rand(rows: int, cols: int, rng: Optional[np.random.Generator] = None) -> Tensor:
    """Create a tensor with random uniform values in [0, 1)."""
    rng = rng if rng is not None else np.random.default_rng()
    return Tensor(rng.random((rows, cols)))


def eye(n: int) -> Tensor:
    """Create an identity matrix."""
    return Tensor(np.eye(n))


def checkerboard(n: int) -> Tensor:
    """Create an n x n binary pattern with 1 where (row + col) is even."""
    if n <= 0:
        raise ValueError("n must be positive")
    i, j = np.indices((n, n))
    return Tensor(((i + j) % 2 == 0).astype(np.float64))
