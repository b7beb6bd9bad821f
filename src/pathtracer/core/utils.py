# core/utils.py
import math
import random
from typing import Optional

from pathtracer.core.vector import Vector3

# Upper bound on rejection-sampling draws before switching to the polar form.
MAX_REJECTION_TRIES = 64


def random_unit_vector(rng: random.Random) -> Vector3:
    """
    Returns a random unit vector, uniformly distributed over the sphere.
    """
    z = rng.random() * 2.0 - 1.0
    a = rng.random() * 2.0 * math.pi
    r = math.sqrt(1.0 - z * z)
    return Vector3(r * math.cos(a), r * math.sin(a), z)


def random_in_unit_sphere(rng: random.Random) -> Vector3:
    """
    Returns a random point strictly inside the unit sphere.
    """
    for _ in range(MAX_REJECTION_TRIES):
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p
    return random_unit_vector(rng) * (rng.random() ** (1.0 / 3.0))


def random_in_unit_disk(rng: random.Random) -> Vector3:
    """
    Returns a random point inside the unit disk on the z = 0 plane.
    """
    for _ in range(MAX_REJECTION_TRIES):
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0)
        if p.dot(p) < 1.0:
            return p
    r = math.sqrt(rng.random())
    a = rng.random() * 2.0 * math.pi
    return Vector3(r * math.cos(a), r * math.sin(a), 0)


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * (2 * v.dot(n))


def refract(uv: Vector3, n: Vector3, ratio: float) -> Vector3:
    """
    Refracts the unit vector uv through a surface with normal n, where ratio
    is the index of the incident medium over the index of the transmitted one.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * ratio
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def schlick(cos_theta: float, ior: float) -> float:
    """
    Schlick's approximation of Fresnel reflectance.
    """
    if ior == 1.0:
        # Matched indices: there is no interface to reflect from.
        return 0.0
    r0 = (1.0 - ior) / (1.0 + ior)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow(1.0 - cos_theta, 5)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    # NaN compares false everywhere, so map it to the low bound explicitly.
    if value != value:
        return low
    return max(low, min(high, value))


def make_rng(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)
