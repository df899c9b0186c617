"""
Core protocols for pydense.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so any
object with the right methods can be injected, including test doubles.

Design Principles:
    - Minimal contracts: the calling conventions of BLAS/LAPACK, nothing more
    - Capability-driven: use supports() to check for a kernel before calling it
    - One dtype per backend instance: generic algorithms never branch on type
"""

from typing import Protocol, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class LinalgBackend(Protocol):
    """
    Protocol for dense linear algebra backends.

    A backend instance is bound to exactly one element dtype and operates on
    flat, row-major buffers of that dtype. Output buffers are mutated in
    place. LAPACK-style routines return an integer status:

        0   success
        > 0 numerical failure (singular factor, no convergence)
        < 0 argument number -status was illegal

    Backends are stateless between calls, which makes them easy to test
    and swap.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{library}_{dtype}'
        Examples: 'lapack_float64', 'lapack_float32'
        """
        ...

    @property
    def dtype(self) -> np.dtype:
        """Element dtype of every buffer this backend accepts."""
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this backend provides a kernel.

        Args:
            capability: One of the constants in pydense.core.capabilities

        Returns:
            True if the kernel is available, False otherwise

        Note:
            Unknown capabilities MUST return False, never raise.
        """
        ...

    def axpy(
        self,
        n: int,
        alpha: float,
        x: NDArray[np.floating[Any]],
        incx: int,
        y: NDArray[np.floating[Any]],
        incy: int,
    ) -> None:
        """y <- alpha * x + y over n strided elements."""
        ...

    def scal(
        self,
        n: int,
        alpha: float,
        x: NDArray[np.floating[Any]],
        incx: int,
    ) -> None:
        """x <- alpha * x over n strided elements."""
        ...

    def gemm(
        self,
        m: int,
        n: int,
        k: int,
        alpha: float,
        a: NDArray[np.floating[Any]],
        lda: int,
        b: NDArray[np.floating[Any]],
        ldb: int,
        beta: float,
        c: NDArray[np.floating[Any]],
        ldc: int,
        trans_a: bool = False,
        trans_b: bool = False,
    ) -> None:
        """
        C <- alpha * op(A) * op(B) + beta * C, row-major.

        op(A) is m x k, op(B) is k x n and C is m x n. lda, ldb and ldc are
        row strides of the stored (untransposed) buffers.
        """
        ...

    def transpose(
        self,
        src: NDArray[np.floating[Any]],
        src_stride: int,
        dst: NDArray[np.floating[Any]],
        dst_stride: int,
        rows: int,
        cols: int,
    ) -> None:
        """
        Out-of-place transpose.

        dst is rows x cols, src is cols x rows; element strides apply to
        both flat buffers.
        """
        ...

    def getrf(
        self,
        n: int,
        a: NDArray[np.floating[Any]],
        lda: int,
        pivots: NDArray[np.integer[Any]],
    ) -> int:
        """LU-factorize the n x n buffer a in place, filling pivots."""
        ...

    def getri(
        self,
        n: int,
        a: NDArray[np.floating[Any]],
        lda: int,
        pivots: NDArray[np.integer[Any]],
        work: NDArray[np.floating[Any]],
        lwork: int,
    ) -> int:
        """Replace the LU factors in a with the inverse, in place."""
        ...

    def geev(
        self,
        compute_left: bool,
        compute_right: bool,
        n: int,
        a: NDArray[np.floating[Any]],
        lda: int,
        wr: NDArray[np.floating[Any]],
        wi: NDArray[np.floating[Any]],
        vl: NDArray[np.floating[Any]],
        ldvl: int,
        vr: NDArray[np.floating[Any]],
        ldvr: int,
        work: NDArray[np.floating[Any]],
        lwork: int,
    ) -> int:
        """
        General real eigensolver.

        With lwork == -1 only the optimal workspace length is computed and
        written to work[0]. Otherwise eigenvalues go to wr/wi and requested
        eigenvectors to vl/vr, column j holding eigenvector j. A complex
        conjugate pair (j, j+1) is packed as real part in column j and
        imaginary part in column j+1.
        """
        ...
