"""Value types shared by the geometry, scheduling and compositing stages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from worldpreview.shared.errors import InvalidGeometry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from worldpreview.shared.progress import CancelToken, ProgressSink


@dataclass(frozen=True)
class LogicalArea:
    """Axis-aligned world rectangle: min corner plus size, integer valued."""

    min_x: int
    min_y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            msg = f'Area size must be non-negative, got {self.width}x{self.height}'
            raise InvalidGeometry(msg)

    @property
    def max_x(self) -> int:
        return self.min_x + self.width

    @property
    def max_y(self) -> int:
        return self.min_y + self.height

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y


@dataclass(frozen=True)
class TileCoordinate:
    """Integer position of one tile in the tile grid."""

    x: int
    z: int

    def __str__(self) -> str:
        return f'({self.x}, {self.z})'


@dataclass(frozen=True)
class TileGrid:
    """Half-open tile range [min, max) along both axes."""

    min_x: int
    min_z: int
    max_x: int
    max_z: int

    @property
    def width(self) -> int:
        return max(0, self.max_x - self.min_x)

    @property
    def depth(self) -> int:
        return max(0, self.max_z - self.min_z)

    @property
    def tile_count(self) -> int:
        return self.width * self.depth

    def __iter__(self) -> Iterator[TileCoordinate]:
        """Row-major: x ascending within z, z ascending."""
        for z in range(self.min_z, self.max_z):
            for x in range(self.min_x, self.max_x):
                yield TileCoordinate(x, z)

    def __len__(self) -> int:
        return self.tile_count


@dataclass(frozen=True)
class Region3D:
    """World volume queried from the data source for one tile."""

    min_x: int
    min_y: int
    min_z: int
    size_x: int
    size_y: int
    size_z: int


@dataclass
class TileSample:
    """
    Data returned by a data source for one tile volume.

    ``facets`` maps facet names to arbitrary per-tile data (usually 2-D numpy
    arrays of shape ``(size_z, size_x)``). Layers read from it but never
    write to it.
    """

    region: Region3D
    facets: dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.region.size_x

    @property
    def depth(self) -> int:
        return self.region.size_z

    def get_facet(self, name: str, default: Any = None) -> Any:
        return self.facets.get(name, default)


@dataclass
class RenderJob:
    """One render request. Lives only for the duration of a render call."""

    width: int
    height: int
    scale: float = 1.0
    progress: ProgressSink | None = None
    cancel: CancelToken | None = None

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            msg = f'Output size must be positive, got {self.width}x{self.height}'
            raise InvalidGeometry(msg)
        if not self.scale > 0 or math.isinf(self.scale):
            msg = f'Scale must be a positive finite number, got {self.scale}'
            raise InvalidGeometry(msg)

    def world_area(self) -> LogicalArea:
        """World rectangle seen by the output, centered on the origin."""
        span_x = self.width * self.scale
        span_y = self.height * self.scale
        return LogicalArea(
            min_x=-(int(span_x) // 2),
            min_y=-(int(span_y) // 2),
            width=math.ceil(span_x),
            height=math.ceil(span_y),
        )
