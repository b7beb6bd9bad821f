# scenes.py
"""Ready-made scenes for the command line. Each builder returns the world
together with the camera settings that frame it."""
import logging
from typing import Callable, Dict, NamedTuple, Optional

from pathtracer.config import CameraSettings
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import (
    ColorPresets, DielectricPresets, MetalPresets, TexturePresets,
)

logger = logging.getLogger(__name__)


class Scene(NamedTuple):
    world: World
    camera: CameraSettings


def single_sphere(seed: Optional[int] = None) -> Scene:
    """A diffuse ball resting on a large ground sphere."""
    world = World()
    world.add(Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.7, 0.3, 0.3))))
    world.add(Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Vector3(0.8, 0.8, 0.0))))
    return Scene(world, CameraSettings())


def material_showcase(seed: Optional[int] = None) -> Scene:
    """Diffuse, metal and hollow glass spheres on a checker floor."""
    world = World()
    world.add(Sphere(Vector3(0, -100.5, -1), 100,
                     Lambertian(TexturePresets.checkerboard())))
    world.add(Sphere(Vector3(0, 0, -1), 0.5, ColorPresets.matte(Vector3(0.1, 0.2, 0.5))))
    world.add(Sphere(Vector3(1, 0, -1), 0.5, Metal(Vector3(0.8, 0.6, 0.2), fuzz=0.2)))
    # Glass bubble: the negative inner radius flips its normals inward.
    glass = DielectricPresets.glass()
    world.add(Sphere(Vector3(-1, 0, -1), 0.5, glass))
    world.add(Sphere(Vector3(-1, 0, -1), -0.45, glass))
    camera = CameraSettings(position=(-2.0, 2.0, 1.0), look_at=(0.0, 0.0, -1.0),
                            vfov=40.0, aperture=0.1)
    return Scene(world, camera)


def noise_spheres(seed: Optional[int] = None) -> Scene:
    """Perlin lattice noise on the ground and on a large sphere."""
    world = World()
    noise = TexturePresets.noise(scale=4.0, seed=seed)
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(noise)))
    world.add(Sphere(Vector3(0, 2, 0), 2, Lambertian(noise)))
    world.add(Sphere(Vector3(4, 1, 1), 1, MetalPresets.silver()))
    green_glass = DielectricPresets.tinted_glass(Vector3(0.9, 1.0, 0.9))
    world.add(Sphere(Vector3(-4, 1, 1), 1, green_glass))
    camera = CameraSettings(position=(13.0, 2.0, 3.0), look_at=(0.0, 1.0, 0.0),
                            vfov=25.0, shutter_close=1.0)
    return Scene(world, camera)


SCENES: Dict[str, Callable[[Optional[int]], Scene]] = {
    "single": single_sphere,
    "materials": material_showcase,
    "noise": noise_spheres,
}


def build_scene(name: str, seed: Optional[int] = None) -> Scene:
    try:
        builder = SCENES[name]
    except KeyError:
        raise KeyError(f"unknown scene {name!r}; choose from {sorted(SCENES)}") from None
    scene = builder(seed)
    logger.info("Built scene %r with %d objects", name, len(scene.world))
    return scene
