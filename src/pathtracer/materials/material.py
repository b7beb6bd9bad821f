# materials/material.py
import random
from typing import NamedTuple, Optional, Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.textures import Texture, SolidTexture


class Reflection(NamedTuple):
    """Outcome of a scatter event: the color multiplier and the spawned ray."""
    attenuation: Vector3
    scattered: Ray


class Material:
    """
    Base of the closed set of surface models: Lambertian, Metal, Dielectric.

    Materials hold no mutable state; every random draw comes from the rng
    passed in by the caller.
    """
    __slots__ = ()

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Reflection]:
        """
        Computes the scattered ray and attenuation, or None when the ray is
        absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")


def as_texture(albedo: Union[Vector3, Texture]) -> Texture:
    if isinstance(albedo, Vector3):
        return SolidTexture(albedo)
    return albedo
