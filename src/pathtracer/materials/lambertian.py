# materials/lambertian.py
import random
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import random_unit_vector
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Reflection, as_texture
from pathtracer.materials.textures import Texture


class Lambertian(Material):
    """
    Ideal diffuse material. Adding a uniform unit vector to the normal gives a
    cosine-weighted distribution over the hemisphere.
    """
    __slots__ = ('texture',)

    def __init__(self, albedo: Union[Vector3, Texture]):
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Reflection:
        scatter_direction = rec.normal + random_unit_vector(rng)

        # The random vector can cancel the normal; fall back to the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        scattered = Ray(rec.p, scatter_direction, ray_in.time)
        return Reflection(self.texture.value(rec), scattered)

    def __repr__(self) -> str:
        return f"Lambertian({self.texture!r})"
