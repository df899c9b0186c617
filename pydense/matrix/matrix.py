"""
Dense row-major matrix container.

A Matrix owns one flat, C-contiguous numpy buffer of length
rows * columns; element (r, c) lives at index r * columns + c. That layout
is what lets the operations in pydense.matrix.solvers hand the buffer to
BLAS/LAPACK without reshaping or copying it.

Rows and columns are fixed at construction. Mutation goes through set() or
item assignment only; the raw buffer is exposed read-only.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pydense.core.compute.precision import resolve_dtype
from pydense.core.compute.tolerances import select_tolerance
from pydense.core.exceptions import ValidationError
from pydense.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_dimension,
    check_index,
)
from pydense.matrix._render import render


class Matrix:
    """
    Dense matrix of real floating-point values in row-major storage.

    Construction:
        Matrix(2, 3)                         # 2x3 of zeros, float64
        Matrix(2, 3, 1.5, dtype=np.float32)  # every cell 1.5
        Matrix.from_rows([[1, 2], [3]])      # ragged rows are zero-filled
        Matrix.from_array(np.eye(3))
        Matrix.identity(3)

    Operators:
        x + y       elementwise sum
        a * x       scalar multiple (either side)
        x @ y       matrix product
        x.T         transpose

    Matrices compare equal when shapes and all elements match. They are
    mutable and therefore unhashable.
    """

    __slots__ = ('_rows', '_columns', '_storage')

    __hash__ = None  # type: ignore[assignment]

    # Make numpy scalars defer to our reflected operators
    __array_ufunc__ = None

    def __init__(
        self,
        rows: int,
        columns: int,
        fill: float = 0.0,
        *,
        dtype: DTypeLike | None = None,
    ):
        n_rows = check_dimension(rows, 'rows')
        n_columns = check_dimension(columns, 'columns')
        resolved = resolve_dtype(dtype)
        value = check_array(fill, 'fill')
        if value.ndim != 0:
            raise ValidationError(f"fill: expected a scalar, got shape {value.shape}")

        self._rows = n_rows
        self._columns = n_columns
        self._storage = np.full(n_rows * n_columns, value, dtype=resolved)

    @classmethod
    def _from_storage(
        cls,
        storage: NDArray[np.floating[Any]],
        rows: int,
        columns: int,
    ) -> Matrix:
        """Adopt a flat buffer without copying. Internal, no validation of values."""
        if storage.ndim != 1 or storage.shape[0] != rows * columns:
            raise ValueError(
                f"storage of shape {storage.shape} does not hold a {rows}x{columns} matrix"
            )
        if not storage.flags.c_contiguous:
            raise ValueError("storage must be C-contiguous")
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._columns = columns
        matrix._storage = storage
        return matrix

    @classmethod
    def from_rows(
        cls,
        contents: Sequence[Sequence[float]],
        *,
        dtype: DTypeLike | None = None,
    ) -> Matrix:
        """
        Build a matrix from a nested sequence of rows.

        The column count is the length of the first row. Each row copies at
        most that many values; cells a short row does not reach stay 0 and
        extra values in a long row are ignored.

        Args:
            contents: Sequence of rows, each a sequence of numbers
            dtype: Element dtype, float64 if omitted

        Returns:
            Matrix with len(contents) rows
        """
        rows = []
        for i, row in enumerate(contents):
            values = check_array(row, f'row {i}')
            check_1d(values, f'row {i}')
            rows.append(values)
        n_rows = len(rows)
        n_columns = rows[0].shape[0] if n_rows else 0
        matrix = cls(n_rows, n_columns, dtype=dtype)

        for i, values in enumerate(rows):
            count = min(n_columns, values.shape[0])
            start = i * n_columns
            matrix._storage[start:start + count] = values[:count]

        return matrix

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """
        Build a matrix from a 2-D array-like.

        float32 and float64 data keep their dtype, integer data becomes
        float64. The values are copied.
        """
        values = check_array(array, 'array')
        check_2d(values, 'array')
        resolved = resolve_dtype(values.dtype, 'array')
        rows, columns = values.shape
        storage = np.array(values, dtype=resolved, order='C').reshape(-1)
        return cls._from_storage(storage, rows, columns)

    @classmethod
    def identity(cls, n: int, *, dtype: DTypeLike | None = None) -> Matrix:
        """n x n identity matrix."""
        matrix = cls(n, n, dtype=dtype)
        matrix._storage[::matrix._columns + 1] = 1.0
        return matrix

    # === Properties ===

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._columns)

    @property
    def size(self) -> int:
        """Number of elements, rows * columns."""
        return self._storage.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    @property
    def storage(self) -> NDArray[np.floating[Any]]:
        """Read-only view of the flat row-major buffer."""
        view = self._storage.view()
        view.flags.writeable = False
        return view

    @property
    def T(self) -> Matrix:
        """Transpose (see pydense.matrix.solvers.transpose)."""
        from pydense.matrix.solvers import transpose
        return transpose(self)

    # === Element access ===

    def get(self, row: int, column: int) -> np.floating[Any]:
        r, c = check_index(row, column, self.shape)
        return self._storage[r * self._columns + c]

    def set(self, row: int, column: int, value: float) -> None:
        r, c = check_index(row, column, self.shape)
        scalar = check_array(value, 'value')
        if scalar.ndim != 0:
            raise ValidationError(f"value: expected a scalar, got shape {scalar.shape}")
        self._storage[r * self._columns + c] = scalar

    def __getitem__(self, key: tuple[int, int]) -> np.floating[Any]:
        return self.get(*_split_key(key))

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        self.set(*_split_key(key), value)

    def __iter__(self) -> Iterator[NDArray[np.floating[Any]]]:
        """Yield each row, in order, as a read-only view of the storage."""
        storage = self.storage
        for r in range(self._rows):
            start = r * self._columns
            yield storage[start:start + self._columns]

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._storage, other._storage)
        )

    def same_shape(self, other: Matrix) -> bool:
        """True if both matrices have the same rows and columns."""
        return self.shape == other.shape

    def allclose(
        self,
        other: Matrix,
        rtol: float | None = None,
        atol: float | None = None,
    ) -> bool:
        """
        Elementwise closeness within the tolerance tier of the lower precision.

        Args:
            other: Matrix to compare against
            rtol: Relative tolerance, overriding the tier's
            atol: Absolute tolerance, overriding the tier's
        """
        if not self.same_shape(other):
            return False
        lower = np.float32 if np.float32 in (self.dtype, other.dtype) else np.float64
        tier = select_tolerance(lower)
        return bool(np.allclose(
            self._storage,
            other._storage,
            rtol=tier.rtol if rtol is None else rtol,
            atol=tier.atol if atol is None else atol,
        ))

    # === Conversion ===

    def copy(self) -> Matrix:
        """Independent copy with its own storage."""
        return Matrix._from_storage(self._storage.copy(), self._rows, self._columns)

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        return self.copy()

    def astype(self, dtype: DTypeLike) -> Matrix:
        """Copy converted to another supported element dtype."""
        resolved = resolve_dtype(dtype)
        return Matrix._from_storage(
            self._storage.astype(resolved), self._rows, self._columns
        )

    def to_array(self) -> NDArray[np.floating[Any]]:
        """2-D numpy copy of the matrix."""
        return self._storage.reshape(self._rows, self._columns).copy()

    def tolist(self) -> list[list[float]]:
        return self.to_array().tolist()

    # === Operators ===

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        from pydense.matrix.solvers import add
        return add(self, other)

    def __mul__(self, other: object) -> Matrix:
        # Matrix * Matrix is undefined, @ is the product
        if isinstance(other, Matrix) or not isinstance(other, numbers.Real):
            return NotImplemented
        from pydense.matrix.solvers import scalar_multiply
        return scalar_multiply(other, self)

    __rmul__ = __mul__

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        from pydense.matrix.solvers import multiply
        return multiply(self, other)

    # === Display ===

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f"Matrix({self._rows}x{self._columns}, dtype={self.dtype.name})"


def _split_key(key: object) -> tuple[int, int]:
    if not isinstance(key, tuple) or len(key) != 2:
        raise TypeError(
            f"Matrix indices must be (row, column) pairs, got {key!r}"
        )
    return key[0], key[1]
