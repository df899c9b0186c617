"""
Comparison tolerances per element dtype.

Matrix.allclose() compares in the tier of the lower of the two operands'
precisions.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike


@dataclass(frozen=True)
class ToleranceTier:
    """rtol/atol pair for one precision."""
    rtol: float
    atol: float
    name: str


FP64 = ToleranceTier(rtol=1e-10, atol=1e-12, name='fp64')

FP32 = ToleranceTier(rtol=1e-4, atol=1e-5, name='fp32')


def select_tolerance(dtype: DTypeLike) -> ToleranceTier:
    """Tier for an element dtype; anything but float32 compares as float64."""
    if np.dtype(dtype) == np.float32:
        return FP32
    return FP64
