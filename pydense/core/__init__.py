"""
Core infrastructure for pydense.

This module provides shared abstractions, utilities, and backend infrastructure
used by the matrix container and its operations.

Key components:
    protocols: LinalgBackend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Shape, index and dtype validators
    compute: Backends, precision, timing
"""

from pydense.core.protocols import LinalgBackend
from pydense.core.result import Result
from pydense.core.exceptions import (
    PyDenseError,
    ValidationError,
    DimensionError,
    IndexOutOfBoundsError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    BackendError,
    ComplexEigenvalueWarning,
)

__all__ = [
    # Protocols
    "LinalgBackend",
    # Result
    "Result",
    # Exceptions
    "PyDenseError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfBoundsError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
    "BackendError",
    "ComplexEigenvalueWarning",
]
