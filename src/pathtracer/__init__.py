"""Monte Carlo path tracer: spheres, diffuse/metal/glass materials, a
thin-lens camera and a multiprocess per-pixel render pipeline."""
from pathtracer.camera.camera import Camera
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.renderer.pipeline import RenderPipeline
from pathtracer.renderer.pixmap import PixMap
from pathtracer.renderer.sampler import PixelSampler
from pathtracer.renderer.tracer import trace

__version__ = "0.1.0"

__all__ = [
    "Camera", "Ray", "Vector3", "Sphere", "World", "Dielectric", "Lambertian",
    "Metal", "RenderPipeline", "PixMap", "PixelSampler", "trace",
]
