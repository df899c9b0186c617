"""
Tests for backend selection and default-backend configuration.
"""

import numpy as np
import pytest

from pydense.core.capabilities import CAPABILITY_AXPY, CAPABILITY_GEEV
from pydense.core.compute.lapack import LapackBackend
from pydense.core.compute.selection import (
    get_default_backend,
    select_backend,
    set_default_backend,
    use_backend,
)
from pydense.core.exceptions import ValidationError


@pytest.fixture(autouse=True)
def restore_default():
    previous = get_default_backend()
    yield
    set_default_backend(previous)


class TestSelectBackend:
    """Resolving 'auto', names and instances to a backend."""

    def test_lapack_by_name(self):
        backend = select_backend('lapack', np.float64)
        assert isinstance(backend, LapackBackend)
        assert backend.dtype == np.float64

    def test_auto_defaults_to_lapack(self):
        assert get_default_backend() == 'lapack'
        assert select_backend('auto', np.float32).name == 'lapack_float32'

    def test_cached_per_dtype(self):
        assert select_backend('lapack', np.float64) is select_backend('auto', 'float64')
        assert select_backend('lapack', np.float32) is not select_backend('lapack', np.float64)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            select_backend('cuda', np.float64)

    def test_instance_passthrough(self, recording_backend):
        assert select_backend(recording_backend, np.float64, CAPABILITY_GEEV) is recording_backend

    def test_instance_dtype_mismatch(self, recording_backend32):
        with pytest.raises(ValidationError, match="operates on float32"):
            select_backend(recording_backend32, np.float64)

    def test_missing_capability(self, make_backend):
        partial = make_backend(np.float64, capabilities={CAPABILITY_AXPY})
        select_backend(partial, np.float64, CAPABILITY_AXPY)
        with pytest.raises(ValidationError, match="does not support geev"):
            select_backend(partial, np.float64, CAPABILITY_GEEV)

    def test_non_backend_object(self):
        with pytest.raises(ValidationError, match="LinalgBackend protocol"):
            select_backend(object(), np.float64)

    def test_unsupported_dtype(self):
        with pytest.raises(ValidationError):
            select_backend('lapack', np.int64)


class TestDefaultBackend:
    """Process-wide and scoped default backends."""

    def test_set_default_instance(self, recording_backend):
        set_default_backend(recording_backend)
        assert select_backend('auto', np.float64) is recording_backend

    def test_explicit_name_ignores_default(self, recording_backend):
        set_default_backend(recording_backend)
        assert isinstance(select_backend('lapack', np.float64), LapackBackend)

    def test_auto_is_not_a_default(self):
        with pytest.raises(ValueError):
            set_default_backend('auto')

    def test_rejects_non_backend(self):
        with pytest.raises(ValidationError):
            set_default_backend(42)

    def test_use_backend_restores(self, recording_backend):
        with use_backend(recording_backend):
            assert get_default_backend() is recording_backend
        assert get_default_backend() == 'lapack'

    def test_use_backend_restores_on_error(self, recording_backend):
        with pytest.raises(RuntimeError):
            with use_backend(recording_backend):
                raise RuntimeError("boom")
        assert get_default_backend() == 'lapack'
