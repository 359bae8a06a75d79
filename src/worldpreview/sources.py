"""Data source protocol consumed by the preview engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from worldpreview.domain.models import Region3D, TileSample


class DataSource(Protocol):
    """
    Supplier of tile samples.

    ``query`` is called concurrently from worker threads and must not require
    external synchronization. ``prepare`` is optional; when present it is
    called once per render, on the calling thread, before any tile is
    dispatched.
    """

    def prepare(self) -> None: ...

    def query(self, region: Region3D) -> TileSample: ...

    def facets(self) -> Iterable[str]: ...


class FunctionDataSource:
    """Adapts a plain ``region -> TileSample`` callable to DataSource."""

    def __init__(
        self,
        fn: Callable[[Region3D], TileSample],
        facets: Iterable[str] = (),
        prepare: Callable[[], None] | None = None,
    ) -> None:
        self._fn = fn
        self._facets = tuple(facets)
        self._prepare = prepare

    def prepare(self) -> None:
        if self._prepare is not None:
            self._prepare()

    def query(self, region: Region3D) -> TileSample:
        return self._fn(region)

    def facets(self) -> tuple[str, ...]:
        return self._facets
