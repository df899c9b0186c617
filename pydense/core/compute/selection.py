"""
Backend selection.

Every matrix operation takes a ``backend=`` argument and resolves it here:

    - 'auto': the configured default (set_default_backend / use_backend),
      which is 'lapack' unless changed
    - 'lapack': the cached LapackBackend for the operands' dtype
    - a LinalgBackend instance: used as-is after checking its dtype and
      capabilities (dependency injection, test doubles)
"""

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Literal, Union

import numpy as np
from numpy.typing import DTypeLike

from pydense.core.compute.lapack import LapackBackend
from pydense.core.compute.precision import resolve_dtype
from pydense.core.exceptions import ValidationError
from pydense.core.protocols import LinalgBackend


# Type alias for backend selection
BackendName = Literal['auto', 'lapack']
BackendChoice = Union[BackendName, LinalgBackend]

_default_choice: BackendChoice = 'lapack'


@lru_cache(maxsize=None)
def _lapack_backend(dtype: np.dtype) -> LapackBackend:
    return LapackBackend(dtype)


def get_default_backend() -> BackendChoice:
    """Return the choice that 'auto' currently resolves to."""
    return _default_choice


def set_default_backend(choice: BackendChoice) -> None:
    """
    Configure what 'auto' resolves to.

    Args:
        choice: 'lapack' or a LinalgBackend instance

    Raises:
        ValueError: If choice is 'auto' or an unknown name
        ValidationError: If an instance does not implement LinalgBackend
    """
    global _default_choice
    _default_choice = _check_choice(choice)


@contextmanager
def use_backend(choice: BackendChoice) -> Iterator[None]:
    """
    Temporarily change the default backend.

    Usage:
        with use_backend(my_backend):
            inv = invert(A)
    """
    previous = get_default_backend()
    set_default_backend(choice)
    try:
        yield
    finally:
        set_default_backend(previous)


def select_backend(
    choice: BackendChoice,
    dtype: DTypeLike,
    *capabilities: str,
) -> LinalgBackend:
    """
    Resolve a backend choice for one operation.

    Args:
        choice: 'auto', 'lapack' or a LinalgBackend instance
        dtype: Element dtype of the operands
        *capabilities: Kernels the operation is about to call

    Returns:
        Backend instance ready to use

    Raises:
        ValueError: If an unknown backend name is given
        ValidationError: If the backend's dtype differs from the operands'
            or it does not support every capability
    """
    resolved_dtype = resolve_dtype(dtype)

    if isinstance(choice, str) and choice == 'auto':
        choice = _default_choice

    if isinstance(choice, str):
        if choice == 'lapack':
            backend: LinalgBackend = _lapack_backend(resolved_dtype)
        else:
            raise ValueError(f"Unknown backend: {choice!r}")
    else:
        backend = _check_choice(choice)

    if np.dtype(backend.dtype) != resolved_dtype:
        raise ValidationError(
            f"backend {backend.name!r} operates on {np.dtype(backend.dtype)}, "
            f"operands are {resolved_dtype}"
        )
    missing = [c for c in capabilities if not backend.supports(c)]
    if missing:
        raise ValidationError(
            f"backend {backend.name!r} does not support {', '.join(missing)}"
        )
    return backend


def _check_choice(choice: BackendChoice) -> BackendChoice:
    if isinstance(choice, str):
        if choice != 'lapack':
            raise ValueError(f"Unknown backend: {choice!r}")
        return choice
    if not isinstance(choice, LinalgBackend):
        raise ValidationError(
            f"{type(choice).__name__} does not implement the LinalgBackend protocol"
        )
    return choice


__all__ = [
    'BackendChoice',
    'BackendName',
    'get_default_backend',
    'select_backend',
    'set_default_backend',
    'use_backend',
]
