# renderer/tracer.py
import math
import random

from pathtracer.core.color import BLACK, WHITE, sky
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable

# Spawned rays start on a surface; ignore hits closer than this.
T_MIN = 0.001


def trace(ray: Ray, world: Hittable, depth: int, rng: random.Random) -> Vector3:
    """
    Radiance carried back along `ray`.

    Equivalent to the recursive definition

        trace(r, 0)     = black
        trace(r, d)     = sky(r)                         on a miss
                        = black                          if the material absorbs
                        = attenuation * trace(r', d - 1) otherwise

    but written as a loop over the attenuation product, so stack use does not
    grow with the bounce budget.
    """
    throughput = WHITE
    for _ in range(depth):
        rec = world.hit(ray, T_MIN, math.inf)
        if rec is None:
            return throughput * sky(ray.direction)

        reflection = rec.material.scatter(ray, rec, rng)
        if reflection is None:
            return BLACK

        throughput = throughput * reflection.attenuation
        ray = reflection.scattered

    # Bounce budget exhausted
    return BLACK
