"""
Preview engine façade.

Owns the worker pool and runs one render as: geometry -> scheduler ->
compositor. A single engine can serve many renders; renders issued through
the same engine share its pool.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from worldpreview.domain.models import RenderJob
from worldpreview.domain.settings import PreviewSettings
from worldpreview.imaging.compositor import Compositor
from worldpreview.imaging.layers import default_registry
from worldpreview.imaging.rasterizer import TileRasterizer
from worldpreview.shared.constants import IMAGE_MODE
from worldpreview.shared.errors import EngineClosed, Interrupted, InvalidGeometry
from worldpreview.tiles.geometry import tile_region, world_to_tile_area
from worldpreview.tiles.scheduler import TileScheduler

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from PIL import Image

    from worldpreview.domain.models import TileCoordinate
    from worldpreview.imaging.layers import LayerRegistry, VisualLayer
    from worldpreview.shared.progress import CancelToken, ProgressSink
    from worldpreview.sources import DataSource

logger = logging.getLogger(__name__)


class PreviewEngine:
    """
    Tiled, parallel preview renderer.

    Usage:
        with PreviewEngine(source, layers) as engine:
            image = engine.render(RenderJob(256, 256, scale=2))

    ``close()`` does not wait for tasks still running on behalf of an
    in-flight render.
    """

    def __init__(
        self,
        source: DataSource,
        layers: Sequence[VisualLayer] | None = None,
        settings: PreviewSettings | None = None,
        *,
        registry: LayerRegistry | None = None,
    ) -> None:
        """
        Initialize engine and start its worker pool.

        Args:
            source: Shared data source, queried from worker threads
            layers: Ordered layer stack; built from ``source.facets()`` via
                ``registry`` when omitted
            settings: Tile dimensions, pool size and colors
            registry: Layer registry used when ``layers`` is omitted

        """
        self.settings = settings or PreviewSettings()
        self._source = source
        if layers is None:
            registry = registry or default_registry()
            layers = registry.create_layers_for(source.facets())
        self.layers = layers
        self._rasterizer = TileRasterizer(layers, self.settings.tile_background)
        self._compositor = Compositor(
            self.settings.tile_size_x,
            self.settings.tile_size_z,
            background=self.settings.output_background,
            axis_color=self.settings.axis_color,
        )
        workers = self.settings.resolved_workers()
        self._executor = ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix=self.settings.thread_name_prefix,
        )
        self._scheduler = TileScheduler(self._executor)
        self._closed = False
        self._lock = threading.Lock()
        logger.info(
            'PreviewEngine started: %d workers, %d layers', workers, len(layers)
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def compute_tile(self, coord: TileCoordinate) -> Image.Image:
        """Query and rasterize one tile. Runs on worker threads."""
        sample = self._source.query(tile_region(coord, self.settings))
        return self._rasterizer.rasterize(sample)

    def render(self, job: RenderJob, out: Image.Image | None = None) -> Image.Image:
        """
        Render the area centered on world origin.

        Args:
            job: Output size, scale, progress sink and cancel token
            out: Optional caller-owned RGBA buffer of the job's size; filled
                in place only when the render completes

        Returns:
            The finished RGBA image (``out`` when given)

        Raises:
            InvalidGeometry: non-positive size/scale or mismatched ``out``
            EngineClosed: engine was closed
            Cancelled: ``job.cancel`` fired during collection
            Interrupted: the calling thread got KeyboardInterrupt while waiting

        """
        if self._closed:
            msg = 'PreviewEngine is closed'
            raise EngineClosed(msg)
        job.validate()
        if out is not None and (
            out.size != (job.width, job.height) or out.mode != IMAGE_MODE
        ):
            msg = (
                f'Output buffer must be {IMAGE_MODE} {job.width}x{job.height}, '
                f'got {out.mode} {out.size[0]}x{out.size[1]}'
            )
            raise InvalidGeometry(msg)

        area = job.world_area()
        grid = world_to_tile_area(
            area, self.settings.tile_size_x, self.settings.tile_size_z
        )
        logger.debug(
            'Render %dx%d scale=%s: %d tiles', job.width, job.height, job.scale,
            grid.tile_count,
        )

        prepare = getattr(self._source, 'prepare', None)
        if prepare is not None:
            prepare()
        try:
            tiles = self._scheduler.run(
                grid, self.compute_tile, progress=job.progress, cancel=job.cancel
            )
        except KeyboardInterrupt as e:
            msg = 'Render interrupted while waiting for tiles'
            raise Interrupted(msg) from e
        except RuntimeError as e:
            # submit() after a concurrent close()
            if self._closed:
                msg = 'PreviewEngine was closed during render'
                raise EngineClosed(msg) from e
            raise

        if out is None:
            out = self._compositor.new_buffer(job.width, job.height)
        else:
            self._compositor.clear(out)
        offset = (area.min_x, area.min_y)
        self._compositor.compose(out, tiles, job.scale, offset)
        self._compositor.draw_axes(out, area, job.scale, offset)
        logger.debug('Render finished: %d tiles composited', len(tiles))
        return out

    def close(self) -> None:
        """Shut down the worker pool. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=False)
        logger.info('PreviewEngine closed')

    def __enter__(self) -> PreviewEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def render_preview(
    engine: PreviewEngine,
    width: int,
    height: int,
    scale: float = 1.0,
    progress: ProgressSink | None = None,
    cancel: CancelToken | None = None,
) -> Image.Image:
    """Build a RenderJob from plain arguments and render it."""
    return engine.render(
        RenderJob(width, height, scale=scale, progress=progress, cancel=cancel)
    )
