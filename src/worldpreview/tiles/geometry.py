"""Conversion between world coordinates and tile-grid coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from worldpreview.domain.models import Region3D, TileCoordinate, TileGrid
from worldpreview.shared.constants import TILE_SIZE_X, TILE_SIZE_Z

if TYPE_CHECKING:
    from worldpreview.domain.models import LogicalArea
    from worldpreview.domain.settings import PreviewSettings


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def world_to_tile_area(
    area: LogicalArea,
    tile_size_x: int = TILE_SIZE_X,
    tile_size_z: int = TILE_SIZE_Z,
) -> TileGrid:
    """
    Compute the tile range covering a world rectangle.

    Floor division on the min corner and ceiling division on the max corner,
    so the grid covers ``area`` even when it is not tile-aligned.

    Args:
        area: World rectangle (its y axis is the world z axis)
        tile_size_x: Tile width in world units
        tile_size_z: Tile depth in world units

    Returns:
        Half-open TileGrid

    """
    first = tile_of_point(area.min_x, area.min_y, tile_size_x, tile_size_z)
    return TileGrid(
        min_x=first.x,
        min_z=first.z,
        max_x=_ceil_div(area.max_x, tile_size_x),
        max_z=_ceil_div(area.max_y, tile_size_z),
    )


def tile_of_point(
    x: int,
    z: int,
    tile_size_x: int = TILE_SIZE_X,
    tile_size_z: int = TILE_SIZE_Z,
) -> TileCoordinate:
    """Tile containing world point (x, z)."""
    return TileCoordinate(x // tile_size_x, z // tile_size_z)


def tile_origin(
    coord: TileCoordinate,
    tile_size_x: int = TILE_SIZE_X,
    tile_size_z: int = TILE_SIZE_Z,
) -> tuple[int, int]:
    """World position of the tile's min corner."""
    return coord.x * tile_size_x, coord.z * tile_size_z


def tile_region(coord: TileCoordinate, settings: PreviewSettings) -> Region3D:
    """3-D volume requested from the data source for one tile."""
    min_x, min_z = tile_origin(coord, settings.tile_size_x, settings.tile_size_z)
    return Region3D(
        min_x=min_x,
        min_y=0,
        min_z=min_z,
        size_x=settings.tile_size_x,
        size_y=settings.volume_height,
        size_z=settings.tile_size_z,
    )
