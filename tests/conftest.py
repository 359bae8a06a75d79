"""Pytest configuration and fixtures for worldpreview tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))
sys.path.insert(0, str(Path(__file__).parent))

from helpers import RED, height_sample  # noqa: E402
from worldpreview.domain.settings import PreviewSettings  # noqa: E402
from worldpreview.imaging.layers import FieldLayer, SolidColorLayer  # noqa: E402
from worldpreview.sources import FunctionDataSource  # noqa: E402


@pytest.fixture
def small_settings():
    """32x32 tiles on a four-thread pool."""
    return PreviewSettings(tile_size_x=32, tile_size_z=32, max_workers=4)


@pytest.fixture
def height_source():
    return FunctionDataSource(height_sample, facets=('surface_height', 'water'))


@pytest.fixture
def height_layers():
    return [FieldLayer('surface_height', lo=-64.0, hi=64.0)]


@pytest.fixture
def red_layers():
    return [SolidColorLayer(RED)]
