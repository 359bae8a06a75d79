"""Tests for progress and cancellation helpers."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from worldpreview.shared.errors import Cancelled
from worldpreview.shared.progress import CancelToken, TileProgress, check_cancelled


class TestTileProgress:
    """Tests for TileProgress class."""

    def test_initial_state(self):
        """New counter should start at zero."""
        progress = TileProgress(total=4)
        assert progress.done == 0
        assert progress.fraction == 0.0

    def test_step_reports_fraction(self):
        """Each step should report done / total to the sink."""
        seen = []
        progress = TileProgress(total=4, sink=seen.append)
        for _ in range(4):
            progress.step()
        assert seen == [0.25, 0.5, 0.75, 1.0]

    def test_step_does_not_exceed_total(self):
        """Extra steps should clamp at 1.0."""
        progress = TileProgress(total=1)
        progress.step()
        assert progress.step() == 1.0

    def test_zero_total(self):
        """Zero total should be treated as complete."""
        assert TileProgress(total=0).fraction == 1.0

    def test_sink_errors_are_logged(self, caplog):
        """A failing sink should not break the counter."""

        def bad_sink(fraction):
            raise RuntimeError('sink failed')

        progress = TileProgress(total=2, sink=bad_sink)
        with caplog.at_level(logging.ERROR):
            progress.step()
        assert progress.done == 1
        assert 'Progress sink failed' in caplog.text

    def test_concurrent_steps_are_monotonic(self):
        """Fractions seen by the sink should never decrease under contention."""
        seen = []
        progress = TileProgress(total=200, sink=seen.append)
        with ThreadPoolExecutor(max_workers=8) as pool:
            for _ in range(200):
                pool.submit(progress.step)
        assert len(seen) == 200
        assert seen == sorted(seen)
        assert seen[-1] == 1.0


class TestCheckCancelled:
    """Tests for check_cancelled function."""

    def test_none_token(self):
        """No token should never cancel."""
        check_cancelled(None)

    def test_unset_event(self):
        """Unset event should not raise."""
        check_cancelled(threading.Event())

    def test_set_event_raises(self):
        """Set event should raise Cancelled with counts."""
        ev = threading.Event()
        ev.set()
        with pytest.raises(Cancelled) as exc_info:
            check_cancelled(ev, completed=3, total=9)
        assert exc_info.value.completed == 3
        assert exc_info.value.total == 9
        assert '3/9' in str(exc_info.value)

    def test_event_is_cancel_token(self):
        """threading.Event should satisfy the CancelToken protocol."""
        assert isinstance(threading.Event(), CancelToken)
