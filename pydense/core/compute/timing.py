"""
Wall-clock timing for backend calls.

Operations with more than one backend phase (the eigensolver's workspace
query and its computation) time each phase separately and attach the
breakdown to their Result envelope.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall timer plus accumulated named sections.

    Usage:
        with Timer() as timer:
            with timer.section('workspace_query'):
                lwork = workspace.query(call)
            with timer.section('solve'):
                info = workspace.execute(call)

        timer.result()
        # {'total_seconds': 0.002, 'workspace_query': 0.0001, 'solve': 0.0018}

    start()/stop() may be called directly instead of using the timer as a
    context manager. A section entered more than once accumulates.
    """

    def __init__(self) -> None:
        self._began: float | None = None
        self._total: float | None = None
        self._sections: dict[str, float] = {}

    def __enter__(self) -> 'Timer':
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        self._began = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        if self._began is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._began

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent inside the block to section ``name``."""
        began = time.perf_counter()
        try:
            yield
        finally:
            spent = time.perf_counter() - began
            self._sections[name] = self._sections.get(name, 0.0) + spent

    def result(self) -> dict[str, float]:
        """
        Timing breakdown.

        Returns:
            'total_seconds' followed by each section in first-entered order

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}
