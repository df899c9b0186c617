"""
Eigendecomposition solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pydense.core.result import Result
from pydense.matrix.matrix import Matrix


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for eigendecomposition.

    This is the immutable data computed by backends. All arrays share the
    input matrix's dtype.
    """
    eigenvalues: NDArray[np.floating[Any]]
    imaginary_parts: NDArray[np.floating[Any]]
    eigenvectors: Matrix
    left_eigenvectors: Matrix | None


@dataclass
class EigenSolution:
    """
    User-facing eigendecomposition results.

    Unpacks as the pair (eigenvectors, eigenvalues):

        vectors, values = eigendecompose(A)

    where column j of ``vectors`` is the right eigenvector for
    ``values[j]``. ``eigenvalues`` holds real parts only. A general real
    matrix can have complex conjugate eigenvalue pairs; for those,
    ``imaginary_parts`` is non-zero, a ComplexEigenvalueWarning was
    emitted, and the full values are available from
    ``complex_eigenvalues`` and ``complex_eigenvectors()``.
    """
    _result: Result[EigenParams]

    def __iter__(self) -> Iterator[Any]:
        yield self.eigenvectors
        yield self.eigenvalues

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        """Real parts of the eigenvalues."""
        return self._result.params.eigenvalues

    @property
    def imaginary_parts(self) -> NDArray[np.floating[Any]]:
        return self._result.params.imaginary_parts

    @property
    def eigenvectors(self) -> Matrix:
        """Right eigenvectors, one per column, in LAPACK pair packing."""
        return self._result.params.eigenvectors

    @property
    def left_eigenvectors(self) -> Matrix | None:
        """Left eigenvectors, one per column, if requested."""
        return self._result.params.left_eigenvectors

    @property
    def has_complex_eigenvalues(self) -> bool:
        return bool(np.any(self.imaginary_parts != 0))

    @property
    def complex_eigenvalues(self) -> NDArray[np.complexfloating[Any, Any]]:
        return self.eigenvalues + 1j * self.imaginary_parts

    def eigenvector(self, j: int) -> NDArray[np.floating[Any]]:
        """Column j of the right eigenvector matrix."""
        return self.eigenvectors.to_array()[:, j]

    def complex_eigenvectors(self, left: bool = False) -> NDArray[np.complexfloating[Any, Any]]:
        """
        Unpack conjugate pairs into complex eigenvectors.

        For a pair (j, j+1) with imaginary_parts[j] > 0 the packed columns
        hold the real and imaginary parts; the eigenvectors are
        v[:, j] + i*v[:, j+1] and its conjugate.

        Args:
            left: Unpack the left eigenvectors instead of the right ones

        Raises:
            ValueError: If left eigenvectors were not computed
        """
        packed = self.left_eigenvectors if left else self.eigenvectors
        if packed is None:
            raise ValueError("left eigenvectors were not computed, pass compute_left=True")

        real = packed.to_array()
        out = real.astype(np.result_type(real.dtype, np.complex64))
        for j in np.flatnonzero(self.imaginary_parts > 0):
            out[:, j] = real[:, j] + 1j * real[:, j + 1]
            out[:, j + 1] = real[:, j] - 1j * real[:, j + 1]
        return out

    @property
    def workspace_size(self) -> int:
        """Workspace length reported by the sizing query (0 for an empty matrix)."""
        return self._result.info['lwork']

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Eigenvalue table."""
        n = self.eigenvalues.shape[0]
        lines = [
            "Eigendecomposition Results",
            "=" * 60,
            f"Order: {n}",
            f"Workspace: {self.workspace_size}",
            "",
            "Eigenvalues:",
            "-" * 60,
        ]
        for i, (re, im) in enumerate(zip(self.eigenvalues, self.imaginary_parts)):
            if im == 0:
                lines.append(f"  λ[{i}]: {re:14.6f}")
            else:
                sign = '+' if im > 0 else '-'
                lines.append(f"  λ[{i}]: {re:14.6f} {sign} {abs(im):.6f}i")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"EigenSolution(n={self.eigenvalues.shape[0]}, "
            f"complex={self.has_complex_eigenvalues}, backend={self.backend_name!r})"
        )
