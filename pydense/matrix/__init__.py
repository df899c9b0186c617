"""
Dense matrices and their linear algebra.

Public API:
    Matrix                       row-major container
    add(x, y)                    elementwise sum
    scalar_multiply(alpha, x)    scalar multiple
    multiply(x, y)               matrix product
    transpose(x)                 transpose
    invert(x)                    inverse (raises SingularMatrixError)
    eigendecompose(x)            -> EigenSolution, unpacks as (vectors, values)

Every operation validates shapes first, then hands contiguous buffers to a
BLAS/LAPACK backend selected with the ``backend=`` keyword.

Example:
    >>> from pydense.matrix import Matrix, invert
    >>> A = Matrix.from_rows([[4.0, 7.0], [2.0, 6.0]])
    >>> (A @ invert(A)).allclose(Matrix.identity(2))
    True
"""

from pydense.matrix.matrix import Matrix
from pydense.matrix.solution import EigenParams, EigenSolution
from pydense.matrix.solvers import (
    add,
    eigendecompose,
    invert,
    multiply,
    scalar_multiply,
    transpose,
)

__all__ = [
    "Matrix",
    "EigenParams",
    "EigenSolution",
    "add",
    "scalar_multiply",
    "multiply",
    "transpose",
    "invert",
    "eigendecompose",
]
