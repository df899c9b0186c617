"""
BLAS/LAPACK backend (via SciPy).

Implements the LinalgBackend protocol on top of the low-level wrappers in
scipy.linalg.blas and scipy.linalg.lapack. One instance is bound to one
element dtype and resolves the matching s*/d* routines once, at
construction.

Row-major adaptation:
    LAPACK is column-major. A row-major n x m buffer read column-major is
    the transpose, so every call is issued on transposed views instead of
    transposed copies:

        GEMM    C^T = op(B)^T op(A)^T
        GETRF   factorizes A^T; GETRI on those factors yields inv(A)^T,
                which read row-major is inv(A)
        GEEV    right eigenvectors of A^T are left eigenvectors of A, so
                the left/right requests are swapped and conjugate-pair
                packing is restored

    When the buffers are contiguous the wrappers write straight into them.
    Otherwise the wrapper returns a fresh array and it is copied back.
"""

import logging
from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray
from scipy.linalg.blas import get_blas_funcs
from scipy.linalg.lapack import get_lapack_funcs

from pydense.core.capabilities import ALL_CAPABILITIES
from pydense.core.compute.precision import resolve_dtype

logger = logging.getLogger(__name__)

# LAPACK argument positions, reported as -position on illegal input
_GETRI_WORK_ARG = 5
_GEEV_WORK_ARG = 12


def _row_major(
    buffer: NDArray[np.floating[Any]],
    rows: int,
    cols: int,
    ld: int,
) -> NDArray[np.floating[Any]]:
    """2-D row-major view of a flat buffer whose rows start every ld elements."""
    needed = (rows - 1) * ld + cols if rows and cols else 0
    if buffer.shape[0] < needed:
        raise ValueError(
            f"buffer of {buffer.shape[0]} elements too short for {rows}x{cols} with ld={ld}"
        )
    step = buffer.strides[0]
    return np.lib.stride_tricks.as_strided(
        buffer,
        shape=(rows, cols),
        strides=(ld * step, step),
    )


def _write_back(
    target: NDArray[np.floating[Any]],
    computed: NDArray[np.floating[Any]],
) -> None:
    """Copy a wrapper's output into the caller's buffer unless written in place."""
    if not np.may_share_memory(target, computed):
        logger.debug("backend output was not written in place, copying back")
        target[...] = computed


def _restore_pair_packing(
    vectors: NDArray[np.floating[Any]],
    wi: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Conjugate complex eigenvector pairs.

    Eigenvectors of A^T reinterpreted as eigenvectors of A belong to the
    conjugate eigenvalue, so the imaginary column of each pair flips sign.
    """
    fixed = np.array(vectors, copy=True)
    pair_starts = np.flatnonzero(wi > 0)
    fixed[:, pair_starts + 1] *= -1
    return fixed


class LapackBackend:
    """
    Dense linear algebra backend using BLAS/LAPACK.

    Implements the LinalgBackend protocol for one element dtype.

    Args:
        dtype: float32 or float64
    """

    def __init__(self, dtype: DTypeLike = np.float64):
        self._dtype = resolve_dtype(dtype)
        self._axpy, self._scal, self._gemm = get_blas_funcs(
            ('axpy', 'scal', 'gemm'), dtype=self._dtype
        )
        self._getrf, self._getri, self._geev, self._geev_lwork = get_lapack_funcs(
            ('getrf', 'getri', 'geev', 'geev_lwork'), dtype=self._dtype
        )

    def __repr__(self) -> str:
        return f"LapackBackend(dtype={self._dtype.name!r})"

    @property
    def name(self) -> str:
        return f'lapack_{self._dtype.name}'

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def supports(self, capability: str) -> bool:
        return capability in ALL_CAPABILITIES

    # === BLAS ===

    def axpy(self, n, alpha, x, incx, y, incy) -> None:
        if n <= 0:
            return
        out = self._axpy(x, y, n=n, a=alpha, incx=incx, incy=incy)
        _write_back(y, out)

    def scal(self, n, alpha, x, incx) -> None:
        if n <= 0:
            return
        out = self._scal(alpha, x, n=n, incx=incx)
        _write_back(x, out)

    def gemm(
        self,
        m, n, k,
        alpha, a, lda,
        b, ldb,
        beta, c, ldc,
        trans_a=False,
        trans_b=False,
    ) -> None:
        if m == 0 or n == 0:
            return
        c2 = _row_major(c, m, n, ldc)
        if k == 0:
            # Empty sum: only the beta term survives
            if beta == 0.0:
                c2[...] = 0.0
            else:
                c2 *= beta
            return

        a2 = _row_major(a, *((k, m) if trans_a else (m, k)), lda)
        b2 = _row_major(b, *((n, k) if trans_b else (k, n)), ldb)

        out = self._gemm(
            alpha, b2.T, a2.T,
            beta=beta,
            c=c2.T,
            trans_a=int(trans_b),
            trans_b=int(trans_a),
            overwrite_c=1,
        )
        _write_back(c2.T, out)

    def transpose(self, src, src_stride, dst, dst_stride, rows, cols) -> None:
        count = rows * cols
        if count == 0:
            return
        source = src[::src_stride][:count].reshape(cols, rows)
        target = dst[::dst_stride][:count]
        target[:] = source.T.ravel()

    # === LAPACK ===

    def getrf(self, n, a, lda, pivots) -> int:
        if n == 0:
            return 0
        a2 = _row_major(a, n, n, lda)
        lu, piv, info = self._getrf(a2.T, overwrite_a=1)
        _write_back(a2.T, lu)
        pivots[:n] = piv
        return int(info)

    def getri(self, n, a, lda, pivots, work, lwork) -> int:
        if n == 0:
            return 0
        if work.shape[0] < lwork:
            return -_GETRI_WORK_ARG
        a2 = _row_major(a, n, n, lda)
        inv_a, info = self._getri(a2.T, pivots[:n], lwork=lwork, overwrite_lu=1)
        _write_back(a2.T, inv_a)
        return int(info)

    def geev(
        self,
        compute_left, compute_right,
        n, a, lda,
        wr, wi,
        vl, ldvl,
        vr, ldvr,
        work, lwork,
    ) -> int:
        # LAPACK sees A^T, so left and right are swapped on the way in
        want_vl = int(compute_right)
        want_vr = int(compute_left)

        if lwork == -1:
            if n == 0:
                work[0] = 1
                return 0
            optimal, info = self._geev_lwork(n, compute_vl=want_vl, compute_vr=want_vr)
            work[0] = optimal
            return int(info)

        if n == 0:
            return 0
        if work.shape[0] < lwork:
            return -_GEEV_WORK_ARG

        a2 = _row_major(a, n, n, lda)
        w_r, w_i, v_l, v_r, info = self._geev(
            a2.T,
            compute_vl=want_vl,
            compute_vr=want_vr,
            lwork=lwork,
            overwrite_a=1,
        )
        wr[:n] = w_r
        wi[:n] = w_i
        if info != 0:
            return int(info)

        if compute_right:
            _row_major(vr, n, n, ldvr)[...] = _restore_pair_packing(v_l, w_i)
        if compute_left:
            _row_major(vl, n, n, ldvl)[...] = _restore_pair_packing(v_r, w_i)
        return 0
