import random

import pytest

from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord


class FixedRandom(random.Random):
    """random.Random whose random() always returns the same value."""
    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def rng():
    return random.Random(1234)


def make_hit(p=Vector3(0, 0, 0), normal=Vector3(0, 1, 0), front_face=True, t=1.0, material=None):
    return HitRecord(p=p, normal=normal, t=t, front_face=front_face, material=material)
