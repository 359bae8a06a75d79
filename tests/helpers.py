"""Test helpers shared across test modules."""

from unittest.mock import MagicMock

import numpy as np

from worldpreview.domain.models import TileSample

RED = (255, 0, 0, 255)
GRAY = (128, 128, 128, 255)


def height_sample(region):
    """Deterministic sample whose surface height depends on world x/z."""
    xs = np.arange(region.min_x, region.min_x + region.size_x)
    zs = np.arange(region.min_z, region.min_z + region.size_z)
    heights = np.add.outer(zs, xs).astype(np.float32)
    water = heights < 0
    return TileSample(region, {'surface_height': heights, 'water': water})


class InterruptingExecutor:
    """
    Executor whose tasks never run.

    Waiting on any of its futures raises KeyboardInterrupt in the waiting
    thread, the way Ctrl-C lands in a caller blocked on ``Future.result()``.
    """

    def __init__(self, *args, **kwargs):
        self.futures = []

    def submit(self, fn, *args, **kwargs):
        future = MagicMock()
        future.done.return_value = False
        future.cancelled.return_value = False
        future.cancel.return_value = True
        future.result.side_effect = KeyboardInterrupt
        self.futures.append(future)
        return future

    def shutdown(self, wait=True, **kwargs):
        pass
