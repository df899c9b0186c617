"""
Shared compute infrastructure for pydense.

This module provides the linear algebra backend, its selection, and the
precision, tolerance and timing utilities the matrix operations rely on.

IMPORTANT: This is NOT where matrix operations live. Those go in
pydense.matrix. This module contains shared NUMERIC infrastructure.

Submodules:
    lapack: BLAS/LAPACK backend (SciPy wrappers)
    selection: Backend choice resolution and default configuration
    precision: Supported dtypes and precision utilities
    tolerances: Per-dtype comparison tolerances
    timing: Execution timing utilities
"""

from pydense.core.compute.lapack import LapackBackend
from pydense.core.compute.selection import (
    BackendChoice,
    get_default_backend,
    select_backend,
    set_default_backend,
    use_backend,
)
from pydense.core.compute.timing import Timer

__all__ = [
    # Backends
    "LapackBackend",
    # Selection
    "BackendChoice",
    "get_default_backend",
    "select_backend",
    "set_default_backend",
    "use_backend",
    # Timing
    "Timer",
]
