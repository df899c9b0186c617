"""
Two-phase workspace protocol for LAPACK routines.

Routines such as GEEV take a scratch buffer whose optimal length depends on
the problem size and the LAPACK build. The convention is to call the
routine once with lwork = -1, read the optimal length back from work[0],
then call it again with a buffer of that length.

WorkspaceQuery makes the two phases explicit:

    SIZING_QUERY --query()--> EXECUTING --execute()--> EXECUTING

execute() before query() is a programming error. The query phase is never
skipped, even when a fixed size would often be enough.
"""

import logging
import math
from enum import Enum
from typing import Any, Callable

import numpy as np
from numpy.typing import DTypeLike, NDArray

from pydense.core.exceptions import BackendError

logger = logging.getLogger(__name__)

# lwork value that asks a routine for its optimal workspace size
QUERY_MARKER = -1

# Signature shared by both phases: (work, lwork) -> status
WorkspaceCall = Callable[[NDArray[np.floating[Any]], int], int]


class WorkspacePhase(Enum):
    SIZING_QUERY = 'sizing_query'
    EXECUTING = 'executing'


class WorkspaceQuery:
    """
    Workspace sizing state machine for one routine invocation.

    Args:
        routine: Routine name, for error messages ('geev')
        dtype: Element dtype of the workspace buffer
        minimum: Smallest length the routine accepts; a reported size below
            it is raised to it
    """

    def __init__(self, routine: str, dtype: DTypeLike, minimum: int = 1):
        self._routine = routine
        self._dtype = np.dtype(dtype)
        self._minimum = max(1, minimum)
        self._phase = WorkspacePhase.SIZING_QUERY
        self._lwork: int | None = None

    @property
    def phase(self) -> WorkspacePhase:
        return self._phase

    @property
    def lwork(self) -> int | None:
        """Workspace length reported by the query, None before it ran."""
        return self._lwork

    def query(self, call: WorkspaceCall) -> int:
        """
        Run the sizing phase.

        Args:
            call: Invokes the routine with the given work buffer and lwork

        Returns:
            Workspace length to allocate

        Raises:
            RuntimeError: If the query already ran
            BackendError: If the routine rejected the query
        """
        if self._phase is not WorkspacePhase.SIZING_QUERY:
            raise RuntimeError(f"{self._routine}: workspace size already queried")

        probe = np.zeros(1, dtype=self._dtype)
        info = call(probe, QUERY_MARKER)
        if info != 0:
            raise BackendError(
                f"{self._routine}: workspace query failed with status {info}",
                routine=self._routine,
                info=info,
            )

        self._lwork = max(self._minimum, math.ceil(float(probe[0])))
        self._phase = WorkspacePhase.EXECUTING
        logger.debug("%s: optimal workspace %d elements", self._routine, self._lwork)
        return self._lwork

    def execute(self, call: WorkspaceCall) -> int:
        """
        Run the computation with a freshly allocated workspace.

        Returns:
            The routine's status code, uninterpreted

        Raises:
            RuntimeError: If query() has not run yet
        """
        if self._phase is not WorkspacePhase.EXECUTING or self._lwork is None:
            raise RuntimeError(
                f"{self._routine}: workspace must be sized by query() before execute()"
            )
        work = np.zeros(self._lwork, dtype=self._dtype)
        return call(work, self._lwork)
