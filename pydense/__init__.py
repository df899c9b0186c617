"""
pydense: dense matrices backed by BLAS/LAPACK.

A row-major matrix container over float32/float64 with elementwise
addition, scalar and matrix multiplication, transpose, inversion and
eigendecomposition, each delegated to an optimized numerical backend.

Submodules:
    matrix: Matrix container and operations
    core: Exceptions, backend protocol, backends and numeric utilities
"""

import logging as _logging

__version__ = "0.1.0"

from pydense.core.compute.selection import (
    get_default_backend,
    set_default_backend,
    use_backend,
)
from pydense.core.exceptions import (
    BackendError,
    ComplexEigenvalueWarning,
    ConvergenceError,
    DimensionError,
    IndexOutOfBoundsError,
    NumericalError,
    PyDenseError,
    SingularMatrixError,
    ValidationError,
)
from pydense.matrix import (
    EigenSolution,
    Matrix,
    add,
    eigendecompose,
    invert,
    multiply,
    scalar_multiply,
    transpose,
)

__all__ = [
    "__version__",
    # Matrix
    "Matrix",
    "EigenSolution",
    "add",
    "scalar_multiply",
    "multiply",
    "transpose",
    "invert",
    "eigendecompose",
    # Configuration
    "get_default_backend",
    "set_default_backend",
    "use_backend",
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

# Library logging stays silent unless the application configures it
_logging.getLogger(__name__).addHandler(_logging.NullHandler())
