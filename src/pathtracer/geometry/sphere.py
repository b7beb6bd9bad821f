# geometry/sphere.py
import math
from typing import Optional
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A negative radius keeps the same surface but flips the outward normal,
    which turns the sphere into a hollow shell (e.g. the inner wall of a
    glass bubble).
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        # Tangent rays and zero-length directions count as misses.
        if discriminant <= 0 or a == 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Nearest root first, the far one only if the near one is out of range
        root = (-half_b - sqrt_disc) / a
        if root <= t_min or root >= t_max:
            root = (-half_b + sqrt_disc) / a
            if root <= t_min or root >= t_max:
                return None

        p = ray.at(root)
        outward_normal = (p - self.center) / self.radius
        rec = HitRecord(p, outward_normal, root, material=self.material)
        rec.set_face_normal(ray, outward_normal)
        return rec

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.material!r})"
