"""Engine settings and TOML profile persistence."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import tomlkit
from pydantic import BaseModel, field_validator

from worldpreview.shared.constants import (
    AXIS_COLOR,
    CHUNK_SIZE_Y,
    OUTPUT_BACKGROUND,
    RGB_COMPONENTS,
    RGBA_COMPONENTS,
    TILE_BACKGROUND,
    TILE_SIZE_X,
    TILE_SIZE_Z,
    TILE_THREAD_PREFIX,
    VERTICAL_CHUNKS,
)

logger = logging.getLogger(__name__)

Color = tuple[int, int, int, int]


class PreviewSettings(BaseModel):
    """Настройки превью: размеры тайлов, пул потоков и цвета."""

    model_config = {
        'extra': 'ignore',
        'frozen': True,
    }

    # Размер тайла в блоках мира (он же в пикселях тайла)
    tile_size_x: int = TILE_SIZE_X
    tile_size_z: int = TILE_SIZE_Z

    # Вертикальный объём запроса: chunk_height * vertical_chunks
    chunk_height: int = CHUNK_SIZE_Y
    vertical_chunks: int = VERTICAL_CHUNKS

    # None -> os.cpu_count()
    max_workers: int | None = None
    thread_name_prefix: str = TILE_THREAD_PREFIX

    tile_background: Color = TILE_BACKGROUND
    output_background: Color = OUTPUT_BACKGROUND
    axis_color: Color = AXIS_COLOR

    @field_validator(
        'tile_size_x', 'tile_size_z', 'chunk_height', 'vertical_chunks'
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            msg = 'Значение должно быть положительным'
            raise ValueError(msg)
        return v

    @field_validator('max_workers')
    @classmethod
    def validate_workers(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            msg = 'max_workers must be positive or None'
            raise ValueError(msg)
        return v

    @field_validator(
        'tile_background', 'output_background', 'axis_color', mode='before'
    )
    @classmethod
    def validate_color(cls, v: object) -> tuple[int, ...]:
        comps = tuple(int(c) for c in v)  # type: ignore[attr-defined]
        if len(comps) == RGB_COMPONENTS:
            comps = (*comps, 255)
        if len(comps) != RGBA_COMPONENTS:
            msg = 'Color must have 3 or 4 components'
            raise ValueError(msg)
        if any(not 0 <= c <= 255 for c in comps):  # noqa: PLR2004
            msg = 'Color components must be in range [0, 255]'
            raise ValueError(msg)
        return comps

    @property
    def volume_height(self) -> int:
        return self.chunk_height * self.vertical_chunks

    def resolved_workers(self) -> int:
        return self.max_workers or max(1, os.cpu_count() or 1)


def load_settings(path: str | Path) -> PreviewSettings:
    """
    Загрузка и валидация профиля TOML -> PreviewSettings.

    Raises:
        FileNotFoundError: profile does not exist
        pydantic.ValidationError: profile contains invalid values

    """
    path = Path(path)
    if not path.exists():
        msg = f'Settings profile not found: {path}'
        raise FileNotFoundError(msg)
    with path.open(encoding='utf-8') as f:
        data = tomlkit.load(f)
    logger.debug('Loaded preview settings from %s', path)
    return PreviewSettings.model_validate(data.unwrap())


def save_settings(settings: PreviewSettings, path: str | Path) -> Path:
    """Write settings to a TOML profile; ``None`` fields are omitted."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = tomlkit.document()
    for key, value in settings.model_dump(exclude_none=True).items():
        doc[key] = list(value) if isinstance(value, tuple) else value
    with path.open('w', encoding='utf-8') as f:
        tomlkit.dump(doc, f)
    logger.debug('Saved preview settings to %s', path)
    return path
