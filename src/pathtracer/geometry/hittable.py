# geometry/hittable.py
from typing import TYPE_CHECKING, Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


class HitRecord:
    """
    Where a ray met a surface: the point, the ray parameter t, the shading
    normal and the surface material.

    The normal is oriented against the incoming ray, and front_face tells
    whether the ray arrived from the outside (along -outward normal). A
    dielectric reads front_face to decide whether it is entering or leaving.
    """
    __slots__ = ('p', 'normal', 't', 'front_face', 'material')

    def __init__(self, p: Vector3, normal: Vector3, t: float,
                 front_face: bool = True, material: Optional["Material"] = None):
        self.p = p
        self.normal = normal
        self.t = t
        self.front_face = front_face
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        # Grazing rays (dot == 0) count as leaving.
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r}, "
                f"front_face={self.front_face}, material={self.material!r})")


class Hittable:
    """
    Surface a ray can intersect.

    hit() must only report t strictly inside (t_min, t_max). World.hit relies
    on this: it narrows t_max to the closest hit so far, so a surface exactly
    at the current bound never replaces the hit that set it, and t_min keeps
    a bounced ray from hitting the surface it just left.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError
