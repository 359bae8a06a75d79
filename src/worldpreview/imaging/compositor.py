"""Assembly of tile images into the output buffer."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from worldpreview.shared.constants import (
    AXIS_COLOR,
    IMAGE_MODE,
    OUTPUT_BACKGROUND,
    TILE_SIZE_X,
    TILE_SIZE_Z,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from worldpreview.domain.models import LogicalArea, TileCoordinate

logger = logging.getLogger(__name__)


def to_rgba_bytes(image: Image.Image) -> bytes:
    """Packed row-major RGBA bytes, ready for texture upload."""
    if image.mode != IMAGE_MODE:
        image = image.convert(IMAGE_MODE)
    return image.tobytes()


class Compositor:
    """
    Places tiles into an output image.

    Output pixel (px, py) shows world point (px * scale + off_x,
    py * scale + off_y). Tile edges are snapped with floor() on both sides so
    neighbouring tiles meet without gaps or overlap.
    """

    def __init__(
        self,
        tile_size_x: int = TILE_SIZE_X,
        tile_size_z: int = TILE_SIZE_Z,
        background: tuple[int, ...] = OUTPUT_BACKGROUND,
        axis_color: tuple[int, ...] = AXIS_COLOR,
    ) -> None:
        self.tile_size_x = tile_size_x
        self.tile_size_z = tile_size_z
        self.background = tuple(background)
        self.axis_color = tuple(axis_color)

    def new_buffer(self, width: int, height: int) -> Image.Image:
        return Image.new(IMAGE_MODE, (width, height), self.background)

    def clear(self, out: Image.Image) -> None:
        out.paste(self.background, (0, 0, out.width, out.height))

    def to_output(
        self, wx: float, wz: float, scale: float, offset: tuple[int, int]
    ) -> tuple[int, int]:
        """World point -> output pixel (floored)."""
        return (
            math.floor((wx - offset[0]) / scale),
            math.floor((wz - offset[1]) / scale),
        )

    def compose(
        self,
        out: Image.Image,
        tiles: Iterable[tuple[TileCoordinate, Image.Image | None]],
        scale: float,
        offset: tuple[int, int],
    ) -> Image.Image:
        """
        Draw tiles in the given order; ``None`` entries are left as background.

        Args:
            out: Destination RGBA image, filled in place
            tiles: ``(coord, image)`` pairs in draw order
            scale: World units per output pixel
            offset: World position of output pixel (0, 0)

        Returns:
            ``out``

        """
        for coord, image in tiles:
            if image is None:
                continue
            wx = coord.x * self.tile_size_x
            wz = coord.z * self.tile_size_z
            x0, y0 = self.to_output(wx, wz, scale, offset)
            x1, y1 = self.to_output(
                wx + self.tile_size_x, wz + self.tile_size_z, scale, offset
            )
            w, h = x1 - x0, y1 - y0
            if w <= 0 or h <= 0:
                continue
            if image.size != (w, h):
                image = image.resize((w, h), Image.Resampling.BILINEAR)
            out.paste(image, (x0, y0))
        return out

    def draw_axes(
        self,
        out: Image.Image,
        area: LogicalArea,
        scale: float,
        offset: tuple[int, int],
    ) -> Image.Image:
        """
        Overlay lines through world (0, 0) across the visible area.

        Lines are one world unit thick: 1 px at scale >= 1, wider when zoomed in.
        """
        draw = ImageDraw.Draw(out)
        left, top = self.to_output(area.min_x, area.min_y, scale, offset)
        right, bottom = self.to_output(area.max_x, area.max_y, scale, offset)
        ax, ay = self.to_output(0, 0, scale, offset)
        right = min(right, out.width - 1)
        bottom = min(bottom, out.height - 1)
        ax1, ay1 = self.to_output(1, 1, scale, offset)
        thick_x = max(1, ax1 - ax)
        thick_y = max(1, ay1 - ay)
        if 0 <= ay < out.height:
            draw.rectangle(
                [(max(left, 0), ay), (right, ay + thick_y - 1)], fill=self.axis_color
            )
        if 0 <= ax < out.width:
            draw.rectangle(
                [(ax, max(top, 0)), (ax + thick_x - 1, bottom)], fill=self.axis_color
            )
        return out
