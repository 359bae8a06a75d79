"""
Visual layers drawn onto tile images.

A layer reads facets from a TileSample and paints into the tile's RGBA
image. Layers are shared by all worker threads of a render, so ``render``
must not keep per-tile state on the layer object.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import numpy as np
from PIL import Image

from worldpreview.imaging.colors import TERRAIN_RAMP, build_color_lut, colorize_field

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from worldpreview.domain.models import TileSample

logger = logging.getLogger(__name__)

SURFACE_HEIGHT_FACET = 'surface_height'
WATER_FACET = 'water'
VEGETATION_FACET = 'vegetation'

WATER_COLOR = (40, 80, 200, 255)
VEGETATION_COLOR = (20, 110, 30, 255)


class VisualLayer(Protocol):
    def is_visible(self) -> bool: ...

    def render(self, image: Image.Image, sample: TileSample) -> None: ...


class BaseLayer:
    """Visibility flag shared by the concrete layers."""

    def __init__(self, *, visible: bool = True) -> None:
        self.visible = visible

    def is_visible(self) -> bool:
        return self.visible

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(visible={self.visible})'


def _require_facet(sample: TileSample, facet: str) -> np.ndarray:
    data = sample.get_facet(facet)
    if data is None:
        msg = f'Tile sample has no facet {facet!r}'
        raise KeyError(msg)
    arr = np.asarray(data)
    if arr.shape[:2] != (sample.depth, sample.width):
        msg = (
            f'Facet {facet!r} has shape {arr.shape[:2]}, '
            f'expected {(sample.depth, sample.width)}'
        )
        raise ValueError(msg)
    return arr


class SolidColorLayer(BaseLayer):
    """Fills the whole tile with one color."""

    def __init__(self, color: tuple[int, ...], *, visible: bool = True) -> None:
        super().__init__(visible=visible)
        self.color = tuple(color)

    def render(self, image: Image.Image, sample: TileSample) -> None:
        image.paste(self.color, (0, 0, image.width, image.height))


class FieldLayer(BaseLayer):
    """Colorizes a scalar facet (e.g. surface height) through a color ramp."""

    def __init__(
        self,
        facet: str,
        lo: float,
        hi: float,
        ramp: list[tuple[float, tuple[int, int, int]]] = TERRAIN_RAMP,
        *,
        visible: bool = True,
    ) -> None:
        super().__init__(visible=visible)
        self.facet = facet
        self.lo = lo
        self.hi = hi
        self._lut = build_color_lut(ramp)

    def render(self, image: Image.Image, sample: TileSample) -> None:
        values = _require_facet(sample, self.facet)
        rgb = colorize_field(values, self.lo, self.hi, self._lut)
        alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
        rgba = np.concatenate([rgb, alpha], axis=2)
        image.paste(Image.fromarray(rgba), (0, 0))


class MaskLayer(BaseLayer):
    """Paints ``color`` wherever a boolean facet is true."""

    def __init__(
        self, facet: str, color: tuple[int, ...], *, visible: bool = True
    ) -> None:
        super().__init__(visible=visible)
        self.facet = facet
        self.color = tuple(color)

    def render(self, image: Image.Image, sample: TileSample) -> None:
        mask = _require_facet(sample, self.facet).astype(bool)
        if not mask.any():
            return
        mask_img = Image.fromarray(mask.astype(np.uint8) * 255)
        image.paste(self.color, (0, 0, mask_img.width, mask_img.height), mask_img)


class LayerRegistry:
    """
    Maps facet names to layer factories.

    Registration order defines draw order: layers registered later are
    drawn over earlier ones.
    """

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[str], VisualLayer]] = {}

    def register(self, facet: str, factory: Callable[[str], VisualLayer]) -> None:
        self._factories[facet] = factory

    def facets(self) -> list[str]:
        return list(self._factories)

    def create_layers_for(self, facets: Iterable[str]) -> list[VisualLayer]:
        """Instantiate layers for the facets a data source provides."""
        available = set(facets)
        layers: list[VisualLayer] = []
        for facet, factory in self._factories.items():
            if facet in available:
                layers.append(factory(facet))
        skipped = available - set(self._factories)
        if skipped:
            logger.debug('No layer registered for facets: %s', sorted(skipped))
        return layers


def default_registry() -> LayerRegistry:
    registry = LayerRegistry()
    registry.register(
        SURFACE_HEIGHT_FACET, lambda facet: FieldLayer(facet, lo=-64.0, hi=192.0)
    )
    registry.register(WATER_FACET, lambda facet: MaskLayer(facet, WATER_COLOR))
    registry.register(
        VEGETATION_FACET, lambda facet: MaskLayer(facet, VEGETATION_COLOR)
    )
    return registry
