# core/ray.py
from pathtracer.core.vector import Vector3


class Ray:
    """
    A half-line origin + t * direction, tagged with the shutter time it was
    sampled at. The direction is not required to be unit length.
    """
    __slots__ = ('origin', 'direction', 'time')

    def __init__(self, origin: Vector3, direction: Vector3, time: float = 0.0):
        object.__setattr__(self, 'origin', origin)
        object.__setattr__(self, 'direction', direction)
        object.__setattr__(self, 'time', time)

    def __setattr__(self, name, value):
        raise AttributeError("Ray is immutable")

    def __reduce__(self):
        return (Ray, (self.origin, self.direction, self.time))

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r}, time={self.time})"
