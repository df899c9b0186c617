"""
Matrix operations.

Every operation follows the same pipeline:

    1. Validate shapes (and dtypes). Nothing else happens on failure.
    2. Resolve a backend for the operands' dtype that supports the kernel.
    3. Prepare buffers: copy an input where the kernel writes in place,
       allocate the result otherwise.
    4. Call the backend (one kernel; factorize + invert for invert();
       workspace query + execution for eigendecompose()).
    5. Wrap the buffer in a Matrix.

Inputs are never mutated. When a kernel would touch zero elements the
backend is not called and the correct empty or zero result is returned.
"""

import logging
import warnings
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pydense.core.capabilities import (
    CAPABILITY_AXPY,
    CAPABILITY_GEEV,
    CAPABILITY_GEMM,
    CAPABILITY_GETRF,
    CAPABILITY_GETRI,
    CAPABILITY_SCAL,
    CAPABILITY_TRANSPOSE,
)
from pydense.core.compute.precision import condition_number
from pydense.core.compute.selection import BackendChoice, select_backend
from pydense.core.compute.timing import Timer
from pydense.core.exceptions import (
    BackendError,
    ComplexEigenvalueWarning,
    ConvergenceError,
    SingularMatrixError,
    ValidationError,
)
from pydense.core.result import Result
from pydense.core.validation import (
    check_array,
    check_inner_dimensions,
    check_same_dtype,
    check_same_shape,
    check_square,
)
from pydense.matrix._workspace import WorkspaceQuery
from pydense.matrix.matrix import Matrix
from pydense.matrix.solution import EigenParams, EigenSolution

logger = logging.getLogger(__name__)


def add(
    x: Matrix | ArrayLike,
    y: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Matrix:
    """
    Elementwise sum x + y.

    Computed as result = copy(y); result += 1.0 * x with a single AXPY over
    the flattened storage of both operands.

    Args:
        x: Matrix (or 2-D array-like)
        y: Matrix of the same shape and dtype
        backend: 'auto', 'lapack' or a LinalgBackend instance

    Returns:
        New matrix with the shape and dtype of the operands

    Raises:
        DimensionError: If shapes differ
        ValidationError: If dtypes differ
    """
    x = _as_matrix(x, 'x')
    y = _as_matrix(y, 'y')
    check_same_shape(x, y, 'add')
    check_same_dtype(x, y, 'add')
    impl = select_backend(backend, x.dtype, CAPABILITY_AXPY)

    result = y.copy()
    n = result.size
    if n:
        logger.debug("add: axpy n=%d on %s", n, impl.name)
        impl.axpy(n, 1.0, x._storage, 1, result._storage, 1)
    return result


def scalar_multiply(
    alpha: float,
    x: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Matrix:
    """
    Scalar multiple alpha * x.

    One in-place SCAL over a copy of x's storage.

    Args:
        alpha: Real scalar
        x: Matrix (or 2-D array-like)
        backend: 'auto', 'lapack' or a LinalgBackend instance

    Returns:
        New matrix with the shape and dtype of x
    """
    scale = check_array(alpha, 'alpha')
    if scale.ndim != 0:
        raise ValidationError(f"alpha: expected a scalar, got shape {scale.shape}")
    x = _as_matrix(x, 'x')
    impl = select_backend(backend, x.dtype, CAPABILITY_SCAL)

    result = x.copy()
    n = result.size
    if n:
        logger.debug("scalar_multiply: scal n=%d on %s", n, impl.name)
        impl.scal(n, float(scale), result._storage, 1)
    return result


def multiply(
    x: Matrix | ArrayLike,
    y: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Matrix:
    """
    Matrix product x @ y.

    One GEMM call, C <- 1.0 * X * Y + 0.0 * C, into a zero-initialized
    result.

    Args:
        x: m x k matrix
        y: k x n matrix of the same dtype
        backend: 'auto', 'lapack' or a LinalgBackend instance

    Returns:
        New m x n matrix

    Raises:
        DimensionError: If x.columns != y.rows
        ValidationError: If dtypes differ
    """
    x = _as_matrix(x, 'x')
    y = _as_matrix(y, 'y')
    check_inner_dimensions(x, y, 'multiply')
    check_same_dtype(x, y, 'multiply')
    impl = select_backend(backend, x.dtype, CAPABILITY_GEMM)

    m, k, n = x.rows, x.columns, y.columns
    result = Matrix(m, n, dtype=x.dtype)
    if m and n and k:
        logger.debug("multiply: gemm m=%d n=%d k=%d on %s", m, n, k, impl.name)
        impl.gemm(
            m, n, k,
            1.0, x._storage, k,
            y._storage, n,
            0.0, result._storage, n,
        )
    return result


def transpose(
    x: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Matrix:
    """
    Transpose of x: result[i, j] == x[j, i].

    One out-of-place backend transpose. Any shape is accepted.
    """
    x = _as_matrix(x, 'x')
    impl = select_backend(backend, x.dtype, CAPABILITY_TRANSPOSE)

    result = Matrix(x.columns, x.rows, dtype=x.dtype)
    if result.size:
        logger.debug("transpose: %dx%d on %s", x.rows, x.columns, impl.name)
        impl.transpose(x._storage, 1, result._storage, 1, result.rows, result.columns)
    return result


def invert(
    x: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Matrix:
    """
    Inverse of a square matrix.

    Algorithm:
        1. GETRF: LU-factorize a copy of x in place, producing n pivots
        2. GETRI: overwrite the factors with the inverse, using the same
           pivots and a workspace of n * n elements

    Args:
        x: Square matrix
        backend: 'auto', 'lapack' or a LinalgBackend instance

    Returns:
        New matrix holding inv(x)

    Raises:
        DimensionError: If x is not square
        SingularMatrixError: If a factor has a zero pivot or the inverse
            is not finite
        BackendError: If the backend rejected an argument
    """
    x = _as_matrix(x, 'x')
    check_square(x, 'invert')
    impl = select_backend(backend, x.dtype, CAPABILITY_GETRF, CAPABILITY_GETRI)

    n = x.rows
    result = x.copy()
    if n == 0:
        return result

    pivots = np.zeros(n, dtype=np.int32)
    info = impl.getrf(n, result._storage, n, pivots)
    _check_inverse_status('getrf', info, x)

    lwork = max(1, n * n)
    work = np.zeros(lwork, dtype=x.dtype)
    info = impl.getri(n, result._storage, n, pivots, work, lwork)
    _check_inverse_status('getri', info, x)

    if not np.all(np.isfinite(result._storage)):
        raise SingularMatrixError(
            "matrix not invertible: inverse has non-finite entries",
            matrix_name='x',
            condition_number=condition_number(x.to_array()),
        )
    return result


def eigendecompose(
    x: Matrix | ArrayLike,
    *,
    compute_left: bool = False,
    backend: BackendChoice = 'auto',
) -> EigenSolution:
    """
    Eigenvalues and eigenvectors of a general real square matrix.

    Algorithm (two-phase GEEV):
        1. Workspace query: GEEV with lwork = -1 reports the optimal
           workspace length
        2. Computation: GEEV with a workspace of that length fills the
           real/imaginary eigenvalue parts and the eigenvector buffers

    The solution unpacks as (eigenvectors, eigenvalues) with eigenvalues
    holding real parts. If any eigenvalue is complex a
    ComplexEigenvalueWarning is emitted; the imaginary parts are kept on
    the solution.

    Args:
        x: Square matrix
        compute_left: Also compute left eigenvectors
        backend: 'auto', 'lapack' or a LinalgBackend instance

    Returns:
        EigenSolution

    Raises:
        DimensionError: If x is not square
        ConvergenceError: If the QR algorithm failed to converge
        BackendError: If the backend rejected an argument
    """
    x = _as_matrix(x, 'x')
    check_square(x, 'eigendecompose')
    impl = select_backend(backend, x.dtype, CAPABILITY_GEEV)

    n = x.rows
    dtype = x.dtype
    ld = max(1, n)
    a = x._storage.copy()
    wr = np.zeros(n, dtype=dtype)
    wi = np.zeros(n, dtype=dtype)
    vr = np.zeros(n * n, dtype=dtype)
    vl = np.zeros(n * n if compute_left else 0, dtype=dtype)

    def call(work: np.ndarray, lwork: int) -> int:
        return impl.geev(
            compute_left, True,
            n, a, ld,
            wr, wi,
            vl, ld,
            vr, ld,
            work, lwork,
        )

    lwork = 0
    with Timer() as timer:
        if n:
            workspace = WorkspaceQuery('geev', dtype, minimum=4 * n)
            with timer.section('workspace_query'):
                lwork = workspace.query(call)
            with timer.section('solve'):
                info = workspace.execute(call)
            _check_eigen_status(info, n)

    messages: list[str] = []
    n_complex = int(np.count_nonzero(wi))
    if n_complex:
        message = (
            f"{n_complex} of {n} eigenvalues have non-zero imaginary parts; "
            f"eigenvalues holds real parts only, see complex_eigenvalues"
        )
        warnings.warn(message, ComplexEigenvalueWarning, stacklevel=2)
        messages.append(message)

    for values in (wr, wi):
        values.flags.writeable = False

    params = EigenParams(
        eigenvalues=wr,
        imaginary_parts=wi,
        eigenvectors=Matrix._from_storage(vr, n, n),
        left_eigenvectors=Matrix._from_storage(vl, n, n) if compute_left else None,
    )
    info_dict: dict[str, Any] = {
        'routine': 'geev',
        'lwork': lwork,
        'compute_left': compute_left,
    }
    return EigenSolution(_result=Result(
        params=params,
        info=info_dict,
        timing=timer.result(),
        backend_name=impl.name,
        warnings=tuple(messages),
    ))


def _as_matrix(value: Matrix | ArrayLike, name: str) -> Matrix:
    """Accept a Matrix as-is, build one from anything else."""
    if isinstance(value, Matrix):
        return value
    try:
        return Matrix.from_array(value)
    except ValidationError as e:
        raise type(e)(f"{name}: {e}") from e


def _check_inverse_status(routine: str, info: int, x: Matrix) -> None:
    if info < 0:
        raise BackendError(
            f"{routine}: argument {-info} had an illegal value",
            routine=routine,
            info=info,
        )
    if info > 0:
        logger.debug("invert: %s reported status %d", routine, info)
        raise SingularMatrixError(
            f"matrix not invertible: {routine} found an exactly zero pivot "
            f"at position {info}",
            matrix_name='x',
            condition_number=condition_number(x.to_array()),
            routine=routine,
            info=info,
        )


def _check_eigen_status(info: int, n: int) -> None:
    if info < 0:
        raise BackendError(
            f"geev: argument {-info} had an illegal value",
            routine='geev',
            info=info,
        )
    if info > 0:
        logger.debug("eigendecompose: geev reported status %d", info)
        raise ConvergenceError(
            f"eigendecompose: QR algorithm failed to compute all eigenvalues, "
            f"{n - info} of {n} converged",
            routine='geev',
            info=info,
            converged=n - info,
        )
