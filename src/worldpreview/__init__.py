"""Tiled, parallel world preview rendering."""
from worldpreview.domain import (
    LogicalArea,
    PreviewSettings,
    Region3D,
    RenderJob,
    TileCoordinate,
    TileGrid,
    TileSample,
    load_settings,
    save_settings,
)
from worldpreview.engine import PreviewEngine, render_preview
from worldpreview.imaging import to_rgba_bytes
from worldpreview.shared.errors import (
    Cancelled,
    EngineClosed,
    Interrupted,
    InvalidGeometry,
    PreviewError,
    TileComputeFailure,
)
from worldpreview.sources import DataSource, FunctionDataSource

__all__ = [
    'Cancelled',
    'DataSource',
    'EngineClosed',
    'FunctionDataSource',
    'Interrupted',
    'InvalidGeometry',
    'LogicalArea',
    'PreviewEngine',
    'PreviewError',
    'PreviewSettings',
    'Region3D',
    'RenderJob',
    'TileCoordinate',
    'TileComputeFailure',
    'TileGrid',
    'TileSample',
    'load_settings',
    'render_preview',
    'save_settings',
    'to_rgba_bytes',
]
