"""Domain layer - value types and settings."""
from worldpreview.domain.models import (
    LogicalArea,
    Region3D,
    RenderJob,
    TileCoordinate,
    TileGrid,
    TileSample,
)
from worldpreview.domain.settings import (
    PreviewSettings,
    load_settings,
    save_settings,
)

__all__ = [
    'LogicalArea',
    'PreviewSettings',
    'Region3D',
    'RenderJob',
    'TileCoordinate',
    'TileGrid',
    'TileSample',
    'load_settings',
    'save_settings',
]
