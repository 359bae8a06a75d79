"""Exceptions raised by the preview pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from worldpreview.domain.models import TileCoordinate


class PreviewError(Exception):
    """Base class for preview rendering errors."""


class InvalidGeometry(PreviewError, ValueError):  # noqa: N818
    """Requested output dimensions or scale cannot produce an image."""


class EngineClosed(PreviewError, RuntimeError):  # noqa: N818
    """Render was attempted on an engine whose worker pool is shut down."""


class Cancelled(PreviewError):  # noqa: N818
    """The job's cancel token fired while tile results were being collected."""

    def __init__(self, completed: int = 0, total: int = 0) -> None:
        super().__init__(f'Render cancelled after {completed}/{total} tiles')
        self.completed = completed
        self.total = total


class Interrupted(PreviewError):  # noqa: N818
    """The calling thread was interrupted while waiting for tiles."""


class TileComputeFailure(PreviewError):  # noqa: N818
    """A single tile could not be queried or rasterized."""

    def __init__(self, coord: TileCoordinate, cause: BaseException) -> None:
        super().__init__(f'Could not rasterize tile {coord}: {cause}')
        self.coord = coord
        self.cause = cause
