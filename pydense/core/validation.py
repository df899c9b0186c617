"""
Input validation utilities for pydense.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about caller intent. Every shape precondition of a
matrix operation is checked here before a backend is touched.

Design principles:
    - No silent type coercion (except integer -> float64 promotion)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import operator
from typing import Any, Protocol

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    ValidationError,
)


class _Shaped(Protocol):
    """Anything with matrix dimensions and an element dtype."""

    @property
    def rows(self) -> int: ...

    @property
    def columns(self) -> int: ...

    @property
    def dtype(self) -> np.dtype: ...


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a real floating-point numpy array.

    Accepts any array-like. Integer and boolean data are promoted to
    float64; floating data keeps its dtype (precision support is checked
    separately by resolve_dtype).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with real floating dtype

    Raises:
        ValidationError: If input is non-numeric or complex
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} is not supported, elements must be real"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_dimension(value: Any, name: str) -> int:
    """
    Validate a row or column count.

    Args:
        value: Candidate count (any integer-like, including numpy integers)
        name: Parameter name for error messages

    Returns:
        The count as a plain int

    Raises:
        ValidationError: If value is not an integer
        DimensionError: If value is negative
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name}: expected an integer, got bool")
    try:
        count = operator.index(value)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__}"
        ) from e
    if count < 0:
        raise DimensionError(f"{name}: must be non-negative, got {count}")
    return count


def check_index(row: Any, column: Any, shape: tuple[int, int]) -> tuple[int, int]:
    """
    Validate an element index against a matrix shape.

    Negative indices are rejected, not wrapped.

    Returns:
        (row, column) as plain ints

    Raises:
        IndexOutOfBoundsError: If either index is out of range
        TypeError: If either index is not an integer
    """
    r = operator.index(row)
    c = operator.index(column)
    rows, columns = shape
    if not (0 <= r < rows and 0 <= c < columns):
        raise IndexOutOfBoundsError(
            f"index ({r}, {c}) out of bounds for {rows}x{columns} matrix",
            row=r,
            column=c,
            shape=shape,
        )
    return r, c


def check_same_shape(x: _Shaped, y: _Shaped, operation: str) -> None:
    """
    Verify two matrices have identical dimensions.

    Raises:
        DimensionError: If shapes differ
    """
    if x.rows != y.rows or x.columns != y.columns:
        raise DimensionError(
            f"{operation}: matrix dimensions not compatible, "
            f"got {x.rows}x{x.columns} and {y.rows}x{y.columns}"
        )


def check_inner_dimensions(x: _Shaped, y: _Shaped, operation: str) -> None:
    """
    Verify x.columns == y.rows for a matrix product.

    Raises:
        DimensionError: If the inner dimensions differ
    """
    if x.columns != y.rows:
        raise DimensionError(
            f"{operation}: matrix dimensions not compatible, "
            f"{x.rows}x{x.columns} has {x.columns} columns but "
            f"{y.rows}x{y.columns} has {y.rows} rows"
        )


def check_square(x: _Shaped, operation: str) -> None:
    """
    Verify a matrix is square.

    Raises:
        DimensionError: If rows != columns
    """
    if x.rows != x.columns:
        raise DimensionError(
            f"{operation}: matrix must be square, got {x.rows}x{x.columns}"
        )


def check_same_dtype(x: _Shaped, y: _Shaped, operation: str) -> None:
    """
    Verify two matrices share an element dtype.

    Mixed precision is not promoted implicitly; convert with astype().

    Raises:
        ValidationError: If dtypes differ
    """
    if x.dtype != y.dtype:
        raise ValidationError(
            f"{operation}: element dtypes differ ({x.dtype} and {y.dtype}), "
            f"convert one operand with astype()"
        )
