import pickle

import numpy as np
import pytest

from conftest import make_hit
from pathtracer.core.vector import Vector3
from pathtracer.materials.textures import CheckerTexture, NoiseTexture, Perlin, SolidTexture


def test_solid_texture_is_constant():
    tex = SolidTexture(Vector3(0.1, 0.2, 0.3))
    assert tex.value(make_hit(p=Vector3(5, -2, 1))) == Vector3(0.1, 0.2, 0.3)


def test_checker_selects_by_sign_of_sine_product():
    even = Vector3(1, 1, 1)
    odd = Vector3(0, 0, 0)
    tex = CheckerTexture(even, odd)
    assert tex.value(make_hit(p=Vector3(0.1, 0.1, 0.1))) == even
    assert tex.value(make_hit(p=Vector3(-0.1, 0.1, 0.1))) == odd
    assert tex.value(make_hit(p=Vector3(-0.1, -0.1, 0.1))) == even


def test_checker_accepts_nested_textures():
    inner = CheckerTexture(Vector3(1, 0, 0), Vector3(0, 1, 0))
    tex = CheckerTexture(inner, SolidTexture(Vector3(0, 0, 1)))
    assert tex.value(make_hit(p=Vector3(0.1, 0.1, 0.1))) == Vector3(1, 0, 0)


def test_perlin_tables_are_permutations_and_read_only():
    perlin = Perlin(seed=3)
    for table in (perlin.perm_x, perlin.perm_y, perlin.perm_z):
        assert sorted(table.tolist()) == list(range(Perlin.POINT_COUNT))
        with pytest.raises(ValueError):
            table[0] = 1
    with pytest.raises(ValueError):
        perlin.lattice[0] = 0.5


def test_perlin_shuffles_by_default():
    perlin = Perlin(seed=3)
    identity = np.arange(Perlin.POINT_COUNT)
    assert not np.array_equal(perlin.perm_x, identity)
    assert not np.array_equal(perlin.perm_x, perlin.perm_y)


def test_perlin_without_shuffle_keeps_identity_tables():
    perlin = Perlin(seed=3, shuffle=False)
    assert np.array_equal(perlin.perm_x, np.arange(Perlin.POINT_COUNT))
    assert perlin.noise(Vector3(3.5, 5.2, 9.9)) == perlin.lattice[3 ^ 5 ^ 9]


def test_perlin_noise_wraps_and_floors():
    perlin = Perlin(seed=11)
    assert perlin.noise(Vector3(1.2, 2.7, 3.1)) == perlin.noise(Vector3(257.9, 258.0, 259.5))
    assert perlin.noise(Vector3(-0.5, 0, 0)) == perlin.noise(Vector3(255.5, 0, 0))


def test_noise_texture_is_grey_in_unit_range_and_seeded():
    a = NoiseTexture(scale=2.0, seed=7)
    b = NoiseTexture(scale=2.0, seed=7)
    for p in (Vector3(0.3, 1.7, -2.2), Vector3(10, 20, 30), Vector3(-4.4, 0.1, 0.9)):
        color = a.value(make_hit(p=p))
        assert color.x == color.y == color.z
        assert 0.0 <= color.x < 1.0
        assert color == b.value(make_hit(p=p))


def test_noise_texture_pickles_with_identical_tables():
    tex = NoiseTexture(scale=3.0, seed=9)
    copy = pickle.loads(pickle.dumps(tex))
    assert np.array_equal(copy.perlin.perm_x, tex.perlin.perm_x)
    for p in (Vector3(0.5, 1.5, 2.5), Vector3(-3.2, 7.1, 0.4)):
        assert copy.value(make_hit(p=p)) == tex.value(make_hit(p=p))
