# materials/dielectric.py
import math
import random

from pathtracer.core.color import WHITE
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import reflect, refract, schlick
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Reflection


class Dielectric(Material):
    """
    Clear refractive material (glass, water). Chooses between reflection and
    refraction with Schlick's approximation; never absorbs.
    """
    __slots__ = ('ior', 'tint')

    def __init__(self, ior: float, tint: Vector3 = WHITE):
        self.ior = ior
        self.tint = tint

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Reflection:
        # Entering: air over glass. Leaving: glass over air.
        ratio = 1.0 / self.ior if rec.front_face else self.ior

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ratio * sin_theta > 1.0
        if cannot_refract or rng.random() < schlick(cos_theta, self.ior):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return Reflection(self.tint, Ray(rec.p, direction, ray_in.time))

    def __repr__(self) -> str:
        return f"Dielectric({self.ior}, tint={self.tint!r})"
