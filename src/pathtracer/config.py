# config.py
import argparse
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigError

# samples per pixel / max bounces
QUALITY_PRESETS = {
    "draft": {"samples": 4, "bounces": 4},
    "preview": {"samples": 16, "bounces": 8},
    "final": {"samples": 100, "bounces": 50},
}

DEFAULT_QUALITY = "preview"


@dataclass
class CameraSettings:
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    look_at: Tuple[float, float, float] = (0.0, 0.0, -1.0)
    vfov: float = 90.0  # degrees
    aperture: float = 0.0
    focus_dist: Optional[float] = None  # None: distance to look_at
    shutter_open: float = 0.0
    shutter_close: float = 0.0

    def validate(self):
        if not 0.0 < self.vfov < 180.0:
            raise ConfigError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.aperture < 0:
            raise ConfigError(f"aperture must be non-negative, got {self.aperture}")
        if self.focus_dist is not None and self.focus_dist <= 0:
            raise ConfigError(f"focus distance must be positive, got {self.focus_dist}")
        if self.shutter_close < self.shutter_open:
            raise ConfigError("shutter closes before it opens")
        if tuple(self.position) == tuple(self.look_at):
            raise ConfigError("camera position and look-at target coincide")


@dataclass
class RenderSettings:
    width: int = 320
    height: int = 180
    samples_per_pixel: int = QUALITY_PRESETS[DEFAULT_QUALITY]["samples"]
    max_depth: int = QUALITY_PRESETS[DEFAULT_QUALITY]["bounces"]
    workers: Optional[int] = None
    chunk_size: int = 32  # pixels per worker task
    seed: Optional[int] = None
    present_interval: float = 0.1  # seconds between preview updates
    output: str = "render.png"
    preview: bool = False
    progress: bool = True
    scene: str = "materials"
    camera: CameraSettings = field(default_factory=CameraSettings)

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ConfigError(f"samples per pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth <= 0:
            raise ConfigError(f"max depth must be positive, got {self.max_depth}")
        if self.workers is not None and self.workers <= 0:
            raise ConfigError(f"workers must be positive, got {self.workers}")
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk size must be positive, got {self.chunk_size}")
        if self.present_interval <= 0:
            raise ConfigError(f"present interval must be positive, got {self.present_interval}")
        self.camera.validate()

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def build_camera(settings: RenderSettings) -> Camera:
    cam = settings.camera
    position = Vector3(*cam.position)
    look_at = Vector3(*cam.look_at)
    focus_dist = cam.focus_dist
    if focus_dist is None:
        focus_dist = (look_at - position).length()
    return Camera(position, look_at, settings.aspect_ratio, math.radians(cam.vfov),
                  focus_dist=focus_dist, aperture=cam.aperture,
                  shutter_open=cam.shutter_open, shutter_close=cam.shutter_close)


def _vector(text: str) -> Tuple[float, float, float]:
    parts = text.split(",")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected x,y,z, got {text!r}")
    try:
        return tuple(float(p) for p in parts)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected x,y,z, got {text!r}") from e


def build_parser(scene_names: Sequence[str] = ()) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Monte Carlo path tracer")
    parser.add_argument('--scene', default="materials",
                        choices=list(scene_names) or None, help='Scene to render (default: materials)')
    parser.add_argument('--width', type=int, default=320, help='Image width in pixels')
    parser.add_argument('--height', type=int, default=180, help='Image height in pixels')
    parser.add_argument('--quality', choices=sorted(QUALITY_PRESETS), default=DEFAULT_QUALITY,
                        help='Samples/bounces preset (default: preview)')
    parser.add_argument('--samples', type=int, help='Samples per pixel (overrides --quality)')
    parser.add_argument('--max-depth', type=int, help='Maximum bounces (overrides --quality)')
    parser.add_argument('--workers', type=int, help='Worker processes (default: CPU count)')
    parser.add_argument('--chunk-size', type=int, default=32, help='Pixels per worker task (default: 32)')
    parser.add_argument('--seed', type=int, help='Seed for reproducible renders')
    parser.add_argument('--output', '-o', default="render.png", help='Output image path')
    parser.add_argument('--preview', action='store_true', help='Show a live preview window')
    parser.add_argument('--present-interval', type=float, default=0.1,
                        help='Seconds between preview refreshes (default: 0.1)')
    parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    # Camera
    parser.add_argument('--position', type=_vector, help='Camera position x,y,z')
    parser.add_argument('--look-at', type=_vector, help='Camera target x,y,z')
    parser.add_argument('--fov', type=float, help='Vertical field of view in degrees')
    parser.add_argument('--aperture', type=float, help='Lens aperture (0 = pinhole)')
    parser.add_argument('--focus-dist', type=float, help='Focus distance (default: distance to target)')
    parser.add_argument('--shutter', type=float, nargs=2, metavar=('OPEN', 'CLOSE'),
                        help='Shutter open and close times')
    parser.add_argument('--log-level', default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help='Logging level')
    return parser


def settings_from_args(args: argparse.Namespace,
                       camera: Optional[CameraSettings] = None) -> RenderSettings:
    """
    Builds validated settings from parsed arguments. `camera` supplies the
    scene's default view; explicit camera flags override it.
    """
    preset = QUALITY_PRESETS[args.quality]
    cam = camera or CameraSettings()
    if args.position is not None:
        cam.position = args.position
    if args.look_at is not None:
        cam.look_at = args.look_at
    if args.fov is not None:
        cam.vfov = args.fov
    if args.aperture is not None:
        cam.aperture = args.aperture
    if args.focus_dist is not None:
        cam.focus_dist = args.focus_dist
    if args.shutter is not None:
        cam.shutter_open, cam.shutter_close = args.shutter

    settings = RenderSettings(
        width=args.width,
        height=args.height,
        samples_per_pixel=args.samples if args.samples is not None else preset["samples"],
        max_depth=args.max_depth if args.max_depth is not None else preset["bounces"],
        workers=args.workers,
        chunk_size=args.chunk_size,
        seed=args.seed,
        present_interval=args.present_interval,
        output=args.output,
        preview=args.preview,
        progress=not args.no_progress,
        scene=args.scene,
        camera=cam,
    )
    settings.validate()
    return settings
