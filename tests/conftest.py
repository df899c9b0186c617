"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pydense.core.capabilities import ALL_CAPABILITIES
from pydense.core.compute.lapack import LapackBackend


class RecordingBackend:
    """
    LinalgBackend spy.

    Delegates to a real LapackBackend and records every kernel call as
    (name, lwork) so tests can assert call counts and ordering. lwork is
    None for kernels without a workspace. Capabilities can be restricted
    to simulate partial backends.
    """

    def __init__(self, dtype=np.float64, capabilities=ALL_CAPABILITIES):
        self._inner = LapackBackend(dtype)
        self._capabilities = frozenset(capabilities)
        self.calls: list[tuple[str, int | None]] = []

    @property
    def name(self) -> str:
        return 'recording_' + self._inner.name

    @property
    def dtype(self):
        return self._inner.dtype

    def supports(self, capability):
        return capability in self._capabilities

    @property
    def kernels(self) -> list[str]:
        return [name for name, _ in self.calls]

    def axpy(self, *args):
        self.calls.append(('axpy', None))
        return self._inner.axpy(*args)

    def scal(self, *args):
        self.calls.append(('scal', None))
        return self._inner.scal(*args)

    def gemm(self, *args, **kwargs):
        self.calls.append(('gemm', None))
        return self._inner.gemm(*args, **kwargs)

    def transpose(self, *args):
        self.calls.append(('transpose', None))
        return self._inner.transpose(*args)

    def getrf(self, *args):
        self.calls.append(('getrf', None))
        return self._inner.getrf(*args)

    def getri(self, n, a, lda, pivots, work, lwork):
        self.calls.append(('getri', lwork))
        return self._inner.getri(n, a, lda, pivots, work, lwork)

    def geev(self, *args):
        lwork = args[-1]
        self.calls.append(('geev', lwork))
        return self._inner.geev(*args)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def recording_backend():
    """float64 backend spy."""
    return RecordingBackend(np.float64)


@pytest.fixture
def recording_backend32():
    """float32 backend spy."""
    return RecordingBackend(np.float32)


@pytest.fixture
def make_backend():
    """Factory for backend spies with a chosen dtype and capability set."""
    return RecordingBackend


@pytest.fixture
def well_conditioned(rng):
    """Random 5x5 matrix made diagonally dominant so it is safely invertible."""
    A = rng.standard_normal((5, 5))
    return A + 5.0 * np.eye(5)
