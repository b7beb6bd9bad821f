# renderer/sampler.py
import random
from typing import List, Optional, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.color import RGB8, from_samples, to_rgb8
from pathtracer.core.utils import make_rng
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigError
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.tracer import trace

PixelResult = Tuple[int, int, RGB8]


class PixelSampler:
    """
    Monte Carlo estimate of one pixel: N camera rays traced and box-filtered.

    Every pixel draws from its own random stream derived from (seed, x, y),
    so the image does not depend on which worker renders a pixel or when.
    """
    def __init__(self, world: Hittable, camera: Camera, width: int, height: int,
                 samples_per_pixel: int = 16, max_depth: int = 8,
                 seed: Optional[int] = None):
        if width <= 0 or height <= 0:
            raise ConfigError(f"image size must be positive, got {width}x{height}")
        if samples_per_pixel <= 0:
            raise ConfigError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
        self.world = world
        self.camera = camera
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.seed = seed

    def pixel_rng(self, x: int, y: int) -> random.Random:
        if self.seed is None:
            return make_rng()
        return make_rng(self.seed * self.width * self.height + y * self.width + x)

    def image_coords(self, x: float, y: float, jx: float = 0.0,
                     jy: float = 0.0) -> Tuple[float, float]:
        """Maps a pixel (plus jitter) to image-plane (u, v); row 0 is the top."""
        u = (x + 0.5 + jx) / self.width - 0.5
        v = 0.5 - (y + 0.5 + jy) / self.height
        return u, v

    def sample_pixel(self, x: int, y: int,
                     rng: Optional[random.Random] = None) -> List[Vector3]:
        if rng is None:
            rng = self.pixel_rng(x, y)
        samples = []
        for i in range(self.samples_per_pixel):
            if i == 0:
                u, v = self.image_coords(x, y)
            else:
                u, v = self.image_coords(x, y, rng.random() - 0.5,
                                         rng.random() - 0.5)
            ray = self.camera.get_ray(u, v, rng)
            samples.append(trace(ray, self.world, self.max_depth, rng))
        return samples

    def render_pixel(self, x: int, y: int) -> PixelResult:
        color = from_samples(self.sample_pixel(x, y))
        return x, y, to_rgb8(color)
