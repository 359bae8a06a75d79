"""Tile grid geometry and parallel tile scheduling."""
from worldpreview.tiles.geometry import (
    tile_of_point,
    tile_origin,
    tile_region,
    world_to_tile_area,
)
from worldpreview.tiles.scheduler import TileScheduler

__all__ = [
    'TileScheduler',
    'tile_of_point',
    'tile_origin',
    'tile_region',
    'world_to_tile_area',
]
