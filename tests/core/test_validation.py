"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype handling, rejection of non-real data
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_dimension: row/column counts
    - check_index: bounds checking without wrap-around
    - check_same_shape / check_inner_dimensions / check_square /
      check_same_dtype: operation preconditions
"""

from types import SimpleNamespace

import numpy as np
import pytest

from pydense.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    ValidationError,
)
from pydense.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_dimension,
    check_index,
    check_inner_dimensions,
    check_ndim,
    check_same_dtype,
    check_same_shape,
    check_square,
)


def shaped(rows, columns, dtype=np.float64):
    return SimpleNamespace(rows=rows, columns=columns, dtype=np.dtype(dtype))


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-real data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float32_preserved(self):
        result = check_array(np.array([1.0, 2.0], dtype=np.float32), "X")
        assert result.dtype == np.float32

    def test_bool_promoted(self):
        result = check_array([True, False], "X")
        assert result.dtype == np.float64

    def test_scalar_becomes_0d(self):
        result = check_array(5.0, "X")
        assert result.ndim == 0

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "X")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b", "c"], "X")

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j, 3.0], "X")

    def test_error_message_includes_name(self):
        with pytest.raises(ValidationError, match="my_var"):
            check_array(["a", "b"], "my_var")


# ═══════════════════════════════════════════════════════════════════════
# check_ndim / check_1d / check_2d
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:
    """Dimensionality checks."""

    def test_wrong_ndim_raises(self):
        with pytest.raises(DimensionError, match="expected 1D.*got 2D"):
            check_ndim(np.array([[1.0, 2.0]]), 1, "X")

    def test_check_1d_passes(self):
        check_1d(np.array([1.0, 2.0, 3.0]), "row")

    def test_check_2d_rejects_1d(self):
        with pytest.raises(DimensionError):
            check_2d(np.array([1.0, 2.0, 3.0]), "array")

    def test_check_2d_rejects_3d(self):
        with pytest.raises(DimensionError):
            check_2d(np.ones((2, 3, 4)), "array")


# ═══════════════════════════════════════════════════════════════════════
# check_dimension
# ═══════════════════════════════════════════════════════════════════════


class TestCheckDimension:
    """Row and column count validation."""

    def test_positive_passes(self):
        assert check_dimension(3, "rows") == 3

    def test_zero_passes(self):
        assert check_dimension(0, "rows") == 0

    def test_numpy_integer_accepted(self):
        value = check_dimension(np.int64(4), "rows")
        assert value == 4
        assert type(value) is int

    def test_negative_raises(self):
        with pytest.raises(DimensionError, match="non-negative"):
            check_dimension(-1, "rows")

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            check_dimension(2.0, "columns")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            check_dimension(True, "columns")


# ═══════════════════════════════════════════════════════════════════════
# check_index
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:
    """Element index bounds checks."""

    def test_in_bounds(self):
        assert check_index(1, 2, (2, 3)) == (1, 2)

    def test_row_too_large(self):
        with pytest.raises(IndexOutOfBoundsError) as exc_info:
            check_index(2, 0, (2, 3))
        assert exc_info.value.row == 2
        assert exc_info.value.shape == (2, 3)

    def test_column_too_large(self):
        with pytest.raises(IndexOutOfBoundsError):
            check_index(0, 3, (2, 3))

    def test_negative_not_wrapped(self):
        with pytest.raises(IndexOutOfBoundsError):
            check_index(-1, 0, (2, 3))

    def test_empty_matrix_has_no_valid_index(self):
        with pytest.raises(IndexOutOfBoundsError):
            check_index(0, 0, (0, 0))

    def test_non_integer_raises_type_error(self):
        with pytest.raises(TypeError):
            check_index(0.5, 0, (2, 2))


# ═══════════════════════════════════════════════════════════════════════
# Operation preconditions
# ═══════════════════════════════════════════════════════════════════════


class TestPreconditions:
    """Shape agreement checks for binary operations."""

    def test_same_shape_passes(self):
        check_same_shape(shaped(2, 3), shaped(2, 3), "add")

    def test_same_shape_rejects_transposed(self):
        with pytest.raises(DimensionError, match="add.*2x3 and 3x2"):
            check_same_shape(shaped(2, 3), shaped(3, 2), "add")

    def test_inner_dimensions_pass(self):
        check_inner_dimensions(shaped(2, 3), shaped(3, 5), "multiply")

    def test_inner_dimensions_reject(self):
        with pytest.raises(DimensionError, match="multiply"):
            check_inner_dimensions(shaped(2, 3), shaped(4, 5), "multiply")

    def test_square_passes(self):
        check_square(shaped(4, 4), "invert")

    def test_square_rejects(self):
        with pytest.raises(DimensionError, match="square.*2x3"):
            check_square(shaped(2, 3), "invert")

    def test_same_dtype_rejects_mixed(self):
        with pytest.raises(ValidationError, match="astype"):
            check_same_dtype(shaped(2, 2, np.float32), shaped(2, 2), "add")
