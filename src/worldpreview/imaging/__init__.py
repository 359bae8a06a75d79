"""Imaging package - tile rasterization, layers and compositing."""

from worldpreview.imaging.colors import build_color_lut, colorize_field
from worldpreview.imaging.compositor import Compositor, to_rgba_bytes
from worldpreview.imaging.layers import (
    BaseLayer,
    FieldLayer,
    LayerRegistry,
    MaskLayer,
    SolidColorLayer,
    VisualLayer,
    default_registry,
)
from worldpreview.imaging.rasterizer import TileRasterizer

__all__ = [
    'BaseLayer',
    'Compositor',
    'FieldLayer',
    'LayerRegistry',
    'MaskLayer',
    'SolidColorLayer',
    'TileRasterizer',
    'VisualLayer',
    'build_color_lut',
    'colorize_field',
    'default_registry',
    'to_rgba_bytes',
]
