# materials/textures.py
import math
from typing import Optional, Union

import numpy as np

from pathtracer.core.vector import Vector3


class Texture:
    """Base class for all textures."""
    __slots__ = ()

    def value(self, rec) -> Vector3:
        """Reflectance at the hit point of `rec`."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


class SolidTexture(Texture):
    """A solid color texture."""
    __slots__ = ('color',)

    def __init__(self, color: Vector3):
        self.color = color

    def value(self, rec) -> Vector3:
        return self.color

    def __repr__(self) -> str:
        return f"SolidTexture({self.color!r})"


class CheckerTexture(Texture):
    """
    A 3D checker pattern picked by the sign of sin(10x) sin(10y) sin(10z),
    so it does not depend on any surface parameterization.
    """
    __slots__ = ('even', 'odd')

    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture]):
        self.even = even if isinstance(even, Texture) else SolidTexture(even)
        self.odd = odd if isinstance(odd, Texture) else SolidTexture(odd)

    def value(self, rec) -> Vector3:
        p = rec.p
        sines = math.sin(10 * p.x) * math.sin(10 * p.y) * math.sin(10 * p.z)
        if sines < 0:
            return self.odd.value(rec)
        return self.even.value(rec)


class Perlin:
    """
    Lattice value noise: three permutation tables hashed together with XOR
    select one of POINT_COUNT random floats.

    Tables are generated once and made read-only.

    Note: shuffle=True is a behaviour change. Earlier versions of this
    renderer had a shuffle loop that never swapped anything, so their tables
    stayed in identity order and the noise reduced to lattice[i ^ j ^ k],
    banding along lattice diagonals. shuffle=False keeps those identity
    tables for matching old renders.
    """
    POINT_COUNT = 256

    def __init__(self, seed: Optional[int] = None, shuffle: bool = True):
        rng = np.random.default_rng(seed)
        self.lattice = rng.random(self.POINT_COUNT)
        self.perm_x = self._generate_perm(rng, shuffle)
        self.perm_y = self._generate_perm(rng, shuffle)
        self.perm_z = self._generate_perm(rng, shuffle)
        for table in (self.lattice, self.perm_x, self.perm_y, self.perm_z):
            table.flags.writeable = False

    @classmethod
    def _generate_perm(cls, rng: np.random.Generator, shuffle: bool) -> np.ndarray:
        if shuffle:
            return rng.permutation(cls.POINT_COUNT)
        return np.arange(cls.POINT_COUNT)

    def noise(self, p: Vector3) -> float:
        mask = self.POINT_COUNT - 1
        i = math.floor(p.x) & mask
        j = math.floor(p.y) & mask
        k = math.floor(p.z) & mask
        return float(self.lattice[self.perm_x[i] ^ self.perm_y[j] ^ self.perm_z[k]])


class NoiseTexture(Texture):
    """Grayscale Perlin lattice noise."""
    __slots__ = ('perlin', 'scale')

    def __init__(self, scale: float = 1.0, seed: Optional[int] = None,
                 shuffle: bool = True):
        self.perlin = Perlin(seed=seed, shuffle=shuffle)
        self.scale = scale

    def value(self, rec) -> Vector3:
        n = self.perlin.noise(rec.p * self.scale)
        return Vector3(n, n, n)
