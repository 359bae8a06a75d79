"""Scatter-gather execution of per-tile work on a shared worker pool."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from worldpreview.shared.errors import Cancelled, TileComputeFailure
from worldpreview.shared.progress import TileProgress, check_cancelled

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor, Future

    from PIL import Image

    from worldpreview.domain.models import TileCoordinate, TileGrid
    from worldpreview.shared.progress import CancelToken, ProgressSink

logger = logging.getLogger(__name__)

TileResult = tuple['TileCoordinate', 'Image.Image | None']


class TileScheduler:
    """
    Dispatches one task per tile and collects results in grid order.

    The executor is borrowed, not owned: its lifetime belongs to the engine.
    Every task counts toward progress whether it succeeds or fails, so the
    sink reaches 1.0 exactly when the last task finishes.
    """

    def __init__(self, executor: Executor) -> None:
        self._executor = executor

    def run(
        self,
        grid: TileGrid,
        compute: Callable[[TileCoordinate], Image.Image],
        *,
        progress: ProgressSink | None = None,
        cancel: CancelToken | None = None,
    ) -> list[TileResult]:
        """
        Compute every tile of ``grid``.

        Args:
            grid: Tiles to compute
            compute: Query + rasterize for one tile; called on worker threads
            progress: Optional sink for the completed fraction
            cancel: Optional token checked around each result wait

        Returns:
            ``(coord, image)`` pairs in row-major order; ``image`` is None for
            tiles whose computation failed

        Raises:
            Cancelled: the token fired during collection

        """
        futures = self.submit(grid, compute, progress)
        try:
            return self.collect(futures, cancel)
        except BaseException:
            self._discard(futures)
            raise

    def submit(
        self,
        grid: TileGrid,
        compute: Callable[[TileCoordinate], Image.Image],
        progress: ProgressSink | None = None,
    ) -> list[tuple[TileCoordinate, Future[Image.Image]]]:
        counter = TileProgress(grid.tile_count, progress)

        def task(coord: TileCoordinate) -> Image.Image:
            try:
                return compute(coord)
            finally:
                counter.step()

        return [(coord, self._executor.submit(task, coord)) for coord in grid]

    def collect(
        self,
        futures: list[tuple[TileCoordinate, Future[Image.Image]]],
        cancel: CancelToken | None = None,
    ) -> list[TileResult]:
        total = len(futures)
        results: list[TileResult] = []
        for coord, future in futures:
            self._check(cancel, len(results), total)
            try:
                image: Image.Image | None = future.result()
            except BaseException as e:
                if not (isinstance(e, Exception) or _raised_by_task(future, e)):
                    # interrupt of the collecting thread itself
                    raise
                failure = TileComputeFailure(coord, e)
                logger.warning('%s', failure, exc_info=e)
                image = None
            results.append((coord, image))
            self._check(cancel, len(results), total)
        return results

    @staticmethod
    def _check(cancel: CancelToken | None, completed: int, total: int) -> None:
        try:
            check_cancelled(cancel, completed=completed, total=total)
        except Cancelled:
            logger.info('Render cancelled after %d/%d tiles', completed, total)
            raise

    @staticmethod
    def _discard(futures: list[tuple[TileCoordinate, Future[Image.Image]]]) -> None:
        """Drop tasks that have not started; running ones finish unobserved."""
        dropped = sum(1 for _, f in futures if f.cancel())
        if dropped:
            logger.debug('Dropped %d pending tile tasks', dropped)


def _raised_by_task(future: Future[Image.Image], exc: BaseException) -> bool:
    """True when ``exc`` is the exception stored on the finished future."""
    return (
        future.done() and not future.cancelled() and future.exception() is exc
    )
