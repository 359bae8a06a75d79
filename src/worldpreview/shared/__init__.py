"""Shared constants, errors and progress helpers."""
from worldpreview.shared.errors import (
    Cancelled,
    EngineClosed,
    Interrupted,
    InvalidGeometry,
    PreviewError,
    TileComputeFailure,
)
from worldpreview.shared.progress import (
    CancelToken,
    ProgressSink,
    TileProgress,
    check_cancelled,
)

__all__ = [
    'CancelToken',
    'Cancelled',
    'EngineClosed',
    'Interrupted',
    'InvalidGeometry',
    'PreviewError',
    'ProgressSink',
    'TileComputeFailure',
    'TileProgress',
    'check_cancelled',
]
