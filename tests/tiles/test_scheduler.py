"""Tests for tiles.scheduler module."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from PIL import Image

from helpers import InterruptingExecutor
from worldpreview.domain.models import TileCoordinate, TileGrid
from worldpreview.shared.errors import Cancelled
from worldpreview.tiles.scheduler import TileScheduler


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


def tile_image(coord):
    return Image.new('RGBA', (4, 4), (coord.x % 256, coord.z % 256, 0, 255))


class TestTileScheduler:
    """Tests for TileScheduler.run."""

    def test_results_in_row_major_order(self, executor):
        """Results should follow grid order even when completion is reversed."""
        grid = TileGrid(0, 0, 3, 2)

        def compute(coord):
            time.sleep(0.002 * (6 - (coord.z * 3 + coord.x)))
            return tile_image(coord)

        results = TileScheduler(executor).run(grid, compute)
        coords = [c for c, _ in results]
        assert coords == [
            TileCoordinate(0, 0),
            TileCoordinate(1, 0),
            TileCoordinate(2, 0),
            TileCoordinate(0, 1),
            TileCoordinate(1, 1),
            TileCoordinate(2, 1),
        ]
        assert all(img is not None for _, img in results)

    def test_failed_tile_is_none(self, executor, caplog):
        """A raising tile should yield None and log a warning with its coordinate."""
        grid = TileGrid(0, 0, 2, 2)

        def compute(coord):
            if coord == TileCoordinate(1, 0):
                raise RuntimeError('boom')
            return tile_image(coord)

        with caplog.at_level(logging.WARNING):
            results = TileScheduler(executor).run(grid, compute)
        by_coord = dict(results)
        assert by_coord[TileCoordinate(1, 0)] is None
        assert by_coord[TileCoordinate(0, 0)] is not None
        assert by_coord[TileCoordinate(1, 1)] is not None
        assert 'Could not rasterize tile (1, 0)' in caplog.text

    def test_progress_counts_failures(self, executor):
        """Progress should reach 1.0 even when a tile fails."""
        grid = TileGrid(0, 0, 4, 1)
        seen = []

        def compute(coord):
            if coord.x == 2:
                raise ValueError('bad tile')
            return tile_image(coord)

        TileScheduler(executor).run(grid, compute, progress=seen.append)
        assert len(seen) == 4
        assert seen == sorted(seen)
        assert seen[-1] == 1.0

    def test_empty_grid(self, executor):
        """Empty grid should return nothing and never call progress."""
        seen = []
        results = TileScheduler(executor).run(
            TileGrid(0, 0, 0, 0), tile_image, progress=seen.append
        )
        assert results == []
        assert seen == []

    def test_cancel_before_collection(self, executor):
        """A pre-set cancel token should raise Cancelled without collecting."""
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(Cancelled) as exc_info:
            TileScheduler(executor).run(TileGrid(0, 0, 2, 2), tile_image, cancel=cancel)
        assert exc_info.value.completed == 0
        assert exc_info.value.total == 4

    def test_cancel_drops_pending_tasks(self):
        """Tasks that have not started should be cancelled on Cancelled."""
        pool = ThreadPoolExecutor(max_workers=1)
        gate = threading.Event()
        started = []
        cancel = threading.Event()
        cancel.set()

        def compute(coord):
            started.append(coord)
            gate.wait(timeout=5)
            return tile_image(coord)

        try:
            with pytest.raises(Cancelled):
                TileScheduler(pool).run(TileGrid(0, 0, 5, 1), compute, cancel=cancel)
        finally:
            gate.set()
            pool.shutdown(wait=True)
        assert len(started) <= 1

    def test_cancel_mid_collection(self, executor):
        """Setting the token from the progress sink should stop collection."""
        cancel = threading.Event()

        def on_progress(fraction):
            cancel.set()

        with pytest.raises(Cancelled):
            TileScheduler(executor).run(
                TileGrid(0, 0, 4, 4), tile_image, progress=on_progress, cancel=cancel
            )

    def test_tile_base_exception_is_isolated(self, executor, caplog):
        """A BaseException raised inside one tile should only blank that tile."""

        class TileAbort(BaseException):
            pass

        def compute(coord):
            if coord == TileCoordinate(1, 0):
                raise TileAbort
            return tile_image(coord)

        seen = []
        with caplog.at_level(logging.WARNING):
            results = TileScheduler(executor).run(
                TileGrid(0, 0, 3, 1), compute, progress=seen.append
            )
        assert [img is None for _, img in results] == [False, True, False]
        assert seen[-1] == 1.0
        assert 'Could not rasterize tile (1, 0)' in caplog.text

    def test_interrupt_while_waiting_propagates(self):
        """An interrupt of the collecting thread should propagate and drop pending tasks."""
        pool = InterruptingExecutor()
        with pytest.raises(KeyboardInterrupt):
            TileScheduler(pool).run(TileGrid(0, 0, 2, 2), tile_image)
        assert len(pool.futures) == 4
        for future in pool.futures:
            future.cancel.assert_called_once()
