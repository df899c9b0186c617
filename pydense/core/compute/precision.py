"""
Element precision for pydense.

Defines which element dtypes the library supports (the precisions BLAS and
LAPACK provide real kernels for) and the condition number reported with
inversion failures.
"""

from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray

from pydense.core.exceptions import ValidationError


# Real precisions with s*/d* BLAS and LAPACK kernels
SUPPORTED_DTYPES: tuple[np.dtype, ...] = (
    np.dtype(np.float32),
    np.dtype(np.float64),
)

# Element dtype used when none is requested
DEFAULT_DTYPE: np.dtype = np.dtype(np.float64)


def resolve_dtype(dtype: DTypeLike | None, name: str = 'dtype') -> np.dtype:
    """
    Normalize and validate an element dtype.

    Args:
        dtype: Anything numpy accepts as a dtype, or None for the default
        name: Parameter name for error messages

    Returns:
        The normalized numpy dtype

    Raises:
        ValidationError: If the dtype is not float32 or float64
    """
    if dtype is None:
        return DEFAULT_DTYPE
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"{name}: not a dtype: {dtype!r}") from e
    if resolved not in SUPPORTED_DTYPES:
        supported = ", ".join(d.name for d in SUPPORTED_DTYPES)
        raise ValidationError(
            f"{name}: unsupported element dtype {resolved}, expected one of {supported}"
        )
    return resolved


def condition_number(A: NDArray[np.floating[Any]]) -> float:
    """
    2-norm condition number of a square matrix, from its singular values.

    Returns:
        Ratio of largest to smallest singular value; inf if the matrix is
        singular, empty, or contains non-finite values.
    """
    if A.size == 0 or not np.all(np.isfinite(A)):
        return np.inf
    s = np.linalg.svd(A, compute_uv=False)
    if s[-1] == 0:
        return np.inf
    return float(s[0] / s[-1])
