"""
Exception hierarchy for pydense.

All exceptions inherit from PyDenseError to allow catching any
library-specific error. Two families sit beneath it:

    - ValidationError: the caller passed something the operation cannot
      accept (bad shape, bad index, unsupported dtype). Raised before any
      backend call is made.
    - NumericalError: the input was well-formed but its numeric content was
      degenerate (singular matrix, eigensolver did not converge). Reported
      through the backend's status code.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyDenseError(Exception):
    """Base exception for all pydense errors."""
    pass


class ValidationError(PyDenseError):
    """
    Input validation failed.

    Raised when caller-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or incompatible.

    Raised when an operation's shape precondition does not hold, e.g.
    adding a 2x3 matrix to a 3x2 matrix or inverting a non-square one.
    """
    pass


class IndexOutOfBoundsError(ValidationError, IndexError):
    """
    Element index outside the matrix.

    Attributes:
        row: Requested row index
        column: Requested column index
        shape: (rows, columns) of the matrix that was indexed
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        column: int | None = None,
        shape: tuple[int, int] | None = None
    ):
        super().__init__(message)
        self.row = row
        self.column = column
        self.shape = shape


class NumericalError(PyDenseError):
    """
    Numerical computation failed.

    Base class for errors arising from the numeric content of a
    well-shaped input.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when inversion is requested but the LU factorization found an
    exactly zero pivot, or the computed inverse is not finite.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        routine: Backend routine that reported the failure ('getrf', 'getri')
        info: Status code returned by the routine
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        routine: str | None = None,
        info: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.routine = routine
        self.info = info


class ConvergenceError(NumericalError):
    """
    Iterative backend algorithm failed to converge.

    Raised when the eigensolver's QR algorithm fails to compute all
    eigenvalues.

    Attributes:
        routine: Backend routine that reported the failure
        info: Status code returned by the routine
        converged: Number of eigenvalues that did converge, if known
    """

    def __init__(
        self,
        message: str,
        routine: str,
        info: int,
        converged: int | None = None
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info
        self.converged = converged


class BackendError(PyDenseError):
    """
    Backend rejected its arguments.

    A negative LAPACK status means argument number ``-info`` was illegal.
    This indicates a bug in how the call was marshalled, not bad data.

    Attributes:
        routine: Backend routine that reported the failure
        info: Status code returned by the routine
    """

    def __init__(self, message: str, routine: str, info: int):
        super().__init__(message)
        self.routine = routine
        self.info = info


class ComplexEigenvalueWarning(UserWarning):
    """Some eigenvalues have non-zero imaginary parts."""
    pass
