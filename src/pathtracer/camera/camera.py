# camera/camera.py
import math
import random

from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk

WORLD_UP = Vector3(0, 1, 0)


class Camera:
    """
    Thin-lens camera with a shutter interval.

    Image-plane coordinates (u, v) run over roughly [-0.5, 0.5]; u grows to
    the right and v grows upward. Rays converge at focus_dist along the view
    direction, and the ray origin is jittered over a lens disk of radius
    aperture / 2. Sampling reads only fields set at construction, so one
    camera can be shared by any number of workers.
    """
    def __init__(self, position: Vector3, look_at: Vector3, aspect_ratio: float,
                 vfov: float, focus_dist: float = 1.0, aperture: float = 0.0,
                 shutter_open: float = 0.0, shutter_close: float = 0.0,
                 vup: Vector3 = WORLD_UP):
        self.position = position
        self.look_at = look_at
        self.aspect_ratio = aspect_ratio
        self.vfov = vfov  # radians
        self.focus_dist = focus_dist
        self.aperture = aperture
        self.lens_radius = aperture / 2.0
        self.shutter_open = shutter_open
        self.shutter_close = shutter_close
        self.w = -1.0 / math.tan(vfov / 2.0)

        # Look-at basis
        self.forward = (look_at - position).normalize()
        right = self.forward.cross(vup)
        if right.near_zero():
            # Looking straight along vup: borrow another axis for the basis.
            right = self.forward.cross(Vector3(0, 0, -1))
            if right.near_zero():
                right = self.forward.cross(Vector3(1, 0, 0))
        self.right = right.normalize()
        self.up = self.right.cross(self.forward).normalize()

    def to_world(self, v: Vector3) -> Vector3:
        """Rotates a view-space vector (x right, y up, -z forward) to world space."""
        return self.right * v.x + self.up * v.y - self.forward * v.z

    def get_ray(self, u: float, v: float, rng: random.Random) -> Ray:
        view = Vector3(u * self.aspect_ratio, v, self.w).normalize() * self.focus_dist
        rd = self.to_world(view)

        offset = self.to_world(random_in_unit_disk(rng) * self.lens_radius)

        if self.shutter_close > self.shutter_open:
            time = rng.uniform(self.shutter_open, self.shutter_close)
        else:
            time = self.shutter_open
        return Ray(self.position + offset, rd - offset, time)

    def __repr__(self) -> str:
        return (f"Camera(position={self.position!r}, look_at={self.look_at!r}, "
                f"vfov={self.vfov}, aperture={self.aperture}, focus_dist={self.focus_dist})")
