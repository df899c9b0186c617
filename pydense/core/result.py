"""
Generic result container for pydense computations.

Operations whose output is more than a single matrix (eigendecomposition)
wrap their payload in a Result, so callers get the backend identity,
timing and non-fatal warnings alongside the numbers.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for routine metadata (routine name, workspace size)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable envelope around an operation's payload.

    Attributes:
        params: Operation-specific payload (eigenvalues, eigenvectors, ...)
        info: Routine metadata, e.g. {'routine': 'geev', 'lwork': 102}
        timing: Section timings from Timer.result(), or None
        backend_name: Name of the backend that ran the kernels
        warnings: Messages of the warnings emitted during the operation
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = ()

    def has_warning(self, substring: str) -> bool:
        """True if any recorded warning mentions ``substring``."""
        return any(substring in message for message in self.warnings)
