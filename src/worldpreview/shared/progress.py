"""Progress reporting and cancellation primitives for render jobs."""

from __future__ import annotations

import logging
import threading
from typing import Protocol, runtime_checkable

from worldpreview.shared.errors import Cancelled

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """Callable receiving the completed fraction in [0.0, 1.0]."""

    def __call__(self, fraction: float) -> None: ...


@runtime_checkable
class CancelToken(Protocol):
    """Anything exposing ``is_set()``, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


def check_cancelled(
    token: CancelToken | None, *, completed: int = 0, total: int = 0
) -> None:
    """Raise Cancelled if the token has been set."""
    if token is not None and token.is_set():
        raise Cancelled(completed, total)


class TileProgress:
    """
    Счётчик завершённых тайлов одной задачи.

    Инкремент и вызов колбэка выполняются под одной блокировкой, поэтому
    последовательность долей, переданных в sink, не убывает даже при
    конкурентных вызовах из рабочих потоков.
    """

    def __init__(self, total: int, sink: ProgressSink | None = None) -> None:
        self.total = max(0, int(total))
        self.done = 0
        self._sink = sink
        self._lock = threading.Lock()

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 1.0
        return self.done / self.total

    def step(self) -> float:
        """Mark one tile as completed and notify the sink."""
        with self._lock:
            self.done = min(self.total, self.done + 1)
            fraction = self.fraction
            if self._sink is not None:
                try:
                    self._sink(fraction)
                except Exception:
                    logger.exception('Progress sink failed at %.3f', fraction)
        return fraction
