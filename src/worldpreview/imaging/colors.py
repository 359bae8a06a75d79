"""Color ramp utilities for colorizing scalar facets."""

from __future__ import annotations

import numpy as np

# Градиент высот: вода -> песок -> трава -> скалы -> снег
TERRAIN_RAMP: list[tuple[float, tuple[int, int, int]]] = [
    (0.0, (20, 40, 120)),
    (0.25, (220, 210, 150)),
    (0.45, (60, 140, 50)),
    (0.75, (110, 100, 90)),
    (1.0, (245, 245, 250)),
]

GRAYSCALE_RAMP: list[tuple[float, tuple[int, int, int]]] = [
    (0.0, (0, 0, 0)),
    (1.0, (255, 255, 255)),
]

DEFAULT_LUT_SIZE = 256


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def build_color_lut(
    ramp: list[tuple[float, tuple[int, int, int]]],
    lut_size: int = DEFAULT_LUT_SIZE,
) -> np.ndarray:
    """
    Build a lookup table (LUT) from a color ramp.

    Args:
        ramp: List of (t, (R, G, B)) tuples where t is in [0, 1], ascending
        lut_size: Size of the resulting LUT

    Returns:
        uint8 array of shape (lut_size, 3)

    """
    if len(ramp) == 1:
        return np.tile(np.array(ramp[0][1], dtype=np.uint8), (lut_size, 1))
    lut = np.zeros((lut_size, 3), dtype=np.uint8)
    for i in range(lut_size):
        t = i / (lut_size - 1) if lut_size > 1 else 0.0
        # find segment
        for j in range(1, len(ramp)):
            t0, c0 = ramp[j - 1]
            t1, c1 = ramp[j]
            if t <= t1 or j == len(ramp) - 1:
                local = 0.0 if t1 == t0 else min(1.0, max(0.0, (t - t0) / (t1 - t0)))
                lut[i] = [round(lerp(c0[k], c1[k], local)) for k in range(3)]
                break
    return lut


def colorize_field(
    values: np.ndarray,
    lo: float,
    hi: float,
    lut: np.ndarray,
) -> np.ndarray:
    """
    Map a 2-D scalar field to RGB through a LUT.

    Values outside [lo, hi] are clamped to the ends of the ramp; NaN maps to
    the low end.

    Returns:
        uint8 array of shape values.shape + (3,)

    """
    inv = 1.0 / (hi - lo) if hi > lo else 1.0
    t = (np.asarray(values, dtype=np.float32) - lo) * inv
    t = np.clip(np.nan_to_num(t, nan=0.0), 0.0, 1.0)
    indices = (t * (len(lut) - 1)).astype(np.int32)
    return lut[indices]
