# core/color.py
import math
from typing import Sequence, Tuple

from pathtracer.core.utils import clamp
from pathtracer.core.vector import Vector3

WHITE = Vector3(1.0, 1.0, 1.0)
BLACK = Vector3(0.0, 0.0, 0.0)
SKY_BLUE = Vector3(0.5, 0.8, 1.0)

BIT_DEPTH = 255.999

RGB8 = Tuple[int, int, int]


def sky(direction: Vector3) -> Vector3:
    """
    Background radiance: white at the nadir blending to sky blue at the zenith.
    """
    unit_dir = direction.normalize()
    t = 0.5 * (unit_dir.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def from_samples(samples: Sequence[Vector3]) -> Vector3:
    """
    Reduces radiance samples to a display color: per-channel mean, square
    root gamma, clamped to [0, 1].
    """
    if not samples:
        return BLACK
    scale = 1.0 / len(samples)
    r = g = b = 0.0
    for s in samples:
        r += s.x
        g += s.y
        b += s.z
    return Vector3(
        clamp(math.sqrt(max(r * scale, 0.0))),
        clamp(math.sqrt(max(g * scale, 0.0))),
        clamp(math.sqrt(max(b * scale, 0.0))),
    )


def to_rgb8(color: Vector3) -> RGB8:
    return (
        int(clamp(color.x) * BIT_DEPTH),
        int(clamp(color.y) * BIT_DEPTH),
        int(clamp(color.z) * BIT_DEPTH),
    )


def to_hex(rgb: RGB8) -> int:
    r, g, b = rgb
    return (r << 16) | (g << 8) | b
