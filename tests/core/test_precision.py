"""
Tests for dtype resolution, condition numbers and tolerance tiers.
"""

import numpy as np
import pytest

from pydense.core.compute.precision import (
    DEFAULT_DTYPE,
    SUPPORTED_DTYPES,
    condition_number,
    resolve_dtype,
)
from pydense.core.compute.tolerances import FP32, FP64, select_tolerance
from pydense.core.exceptions import ValidationError


class TestResolveDtype:
    """Normalizing and rejecting element dtypes."""

    def test_none_is_default(self):
        assert resolve_dtype(None) == DEFAULT_DTYPE == np.float64

    @pytest.mark.parametrize("dtype", [np.float32, np.float64, 'float32', 'f8'])
    def test_supported(self, dtype):
        assert resolve_dtype(dtype) in SUPPORTED_DTYPES

    @pytest.mark.parametrize(
        "dtype", [np.int64, np.float16, np.complex128, np.longdouble, object]
    )
    def test_unsupported(self, dtype):
        if np.dtype(dtype) == np.float64:
            pytest.skip("longdouble is float64 on this platform")
        with pytest.raises(ValidationError, match="unsupported element dtype"):
            resolve_dtype(dtype)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="not a dtype"):
            resolve_dtype("not-a-dtype")

    def test_name_in_message(self):
        with pytest.raises(ValidationError, match="^array:"):
            resolve_dtype(np.int32, name='array')


class TestConditionNumber:
    """2-norm condition numbers reported with inversion failures."""

    def test_identity(self):
        assert condition_number(np.eye(4)) == pytest.approx(1.0)

    def test_diagonal(self):
        assert condition_number(np.diag([10.0, 1.0])) == pytest.approx(10.0)

    def test_singular_is_inf(self):
        assert condition_number(np.zeros((3, 3))) == np.inf

    def test_empty_is_inf(self):
        assert condition_number(np.zeros((0, 0))) == np.inf

    def test_non_finite_is_inf(self):
        assert condition_number(np.array([[np.nan, 0.0], [0.0, 1.0]])) == np.inf


class TestSelectTolerance:
    """Tier selection by element dtype."""

    def test_fp64(self):
        assert select_tolerance(np.float64) is FP64

    def test_fp32(self):
        assert select_tolerance(np.float32) is FP32

    def test_tiers_ordered(self):
        assert FP64.rtol < FP32.rtol
        assert FP64.atol < FP32.atol
