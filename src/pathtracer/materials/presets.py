# materials/presets.py
"""Named materials and textures used by the demo scenes."""
from typing import Optional

from pathtracer.core.vector import Vector3
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, NoiseTexture

CROWN_GLASS_IOR = 1.52


class MetalPresets:

    @staticmethod
    def silver() -> Metal:
        return Metal(Vector3(0.95, 0.93, 0.88), fuzz=0.05)


class DielectricPresets:
    """Glass with a crown-glass index; the tint filters every bounce."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(CROWN_GLASS_IOR)

    @staticmethod
    def tinted_glass(tint: Vector3) -> Dielectric:
        return Dielectric(CROWN_GLASS_IOR, tint)


class ColorPresets:

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        return Lambertian(color)


class TexturePresets:

    @staticmethod
    def checkerboard(even: Optional[Vector3] = None,
                     odd: Optional[Vector3] = None) -> CheckerTexture:
        """White and moss-green 3D checker, the usual ground plane."""
        return CheckerTexture(even or Vector3(0.9, 0.9, 0.9),
                              odd or Vector3(0.2, 0.3, 0.1))

    @staticmethod
    def noise(scale: float = 4.0, seed: Optional[int] = None) -> NoiseTexture:
        return NoiseTexture(scale=scale, seed=seed)
