# materials/metal.py
import random
from typing import Optional, Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import clamp, reflect, random_in_unit_sphere
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Reflection, as_texture
from pathtracer.materials.textures import Texture


class Metal(Material):
    """
    Mirror-like material; fuzz in [0, 1] blurs the reflection.
    """
    __slots__ = ('texture', 'fuzz')

    def __init__(self, albedo: Union[Vector3, Texture], fuzz: float = 0.0):
        self.texture = as_texture(albedo)
        self.fuzz = clamp(fuzz)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Reflection]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        if self.fuzz > 0:
            reflected = reflected + random_in_unit_sphere(rng) * self.fuzz
        scattered = Ray(rec.p, reflected, ray_in.time)

        if scattered.direction.dot(rec.normal) > 0:
            return Reflection(self.texture.value(rec), scattered)
        return None  # Absorbed: fuzz pushed the ray below the surface

    def __repr__(self) -> str:
        return f"Metal({self.texture!r}, fuzz={self.fuzz})"
