# geometry/world.py
from typing import Iterator, List, Optional

from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


class World(Hittable):
    """
    An ordered, append-only collection of Hittable objects.

    Intersection is a linear sweep over every member; the search interval
    shrinks to the closest hit found so far.
    """
    def __init__(self, objects=None):
        self._objects: List[Hittable] = []
        for obj in objects or ():
            self.add(obj)

    def add(self, obj: Hittable) -> "World":
        self._objects.append(obj)
        return self

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self._objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
