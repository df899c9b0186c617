"""
Tests for the section timer.
"""

import pytest

from pydense.core.compute.timing import Timer


class TestTimer:
    """Overall and per-section wall-clock timing."""

    def test_result_has_total_and_sections(self):
        timer = Timer()
        timer.start()
        with timer.section('workspace_query'):
            pass
        with timer.section('solve'):
            pass
        timer.stop()

        result = timer.result()
        assert set(result) == {'total_seconds', 'workspace_query', 'solve'}
        assert all(value >= 0.0 for value in result.values())

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        for _ in range(3):
            with timer.section('solve'):
                pass
        timer.stop()
        assert list(timer.result()) == ['total_seconds', 'solve']

    def test_section_recorded_on_exception(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ValueError):
            with timer.section('solve'):
                raise ValueError("boom")
        timer.stop()
        assert 'solve' in timer.result()

    def test_context_manager(self):
        with Timer() as timer:
            with timer.section('workspace_query'):
                pass
        result = timer.result()
        assert list(result) == ['total_seconds', 'workspace_query']
        assert result['total_seconds'] >= result['workspace_query']

    def test_context_manager_stops_on_exception(self):
        with pytest.raises(ValueError):
            with Timer() as timer:
                raise ValueError("boom")
        assert 'total_seconds' in timer.result()

    def test_restart_clears_total(self):
        timer = Timer()
        timer.start()
        timer.stop()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError, match="before start"):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError, match="before stop"):
            timer.result()
