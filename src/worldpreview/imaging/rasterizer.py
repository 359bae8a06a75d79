"""Rasterization of a single tile sample into an RGBA image."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image

from worldpreview.shared.constants import IMAGE_MODE, TILE_BACKGROUND

if TYPE_CHECKING:
    from collections.abc import Sequence

    from worldpreview.domain.models import TileSample
    from worldpreview.imaging.layers import VisualLayer


class TileRasterizer:
    """
    Draws the visible layers of a shared layer stack onto a fresh tile image.

    Note: ``rasterize`` runs on worker threads concurrently. It only writes to
    the image it allocates; layers and samples are read-only here.
    """

    def __init__(
        self,
        layers: Sequence[VisualLayer],
        background: tuple[int, ...] = TILE_BACKGROUND,
    ) -> None:
        self.layers = layers
        self.background = tuple(background)

    def rasterize(self, sample: TileSample) -> Image.Image:
        """
        Render one tile.

        Args:
            sample: Tile data; its x/z extent defines the image size

        Returns:
            RGBA image of size (sample.width, sample.depth)

        """
        image = Image.new(IMAGE_MODE, (sample.width, sample.depth), self.background)
        for layer in self.layers:
            if layer.is_visible():
                layer.render(image, sample)
        return image
