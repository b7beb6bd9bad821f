# main.py
import logging
import sys
from typing import Optional, Sequence

from pathtracer.config import RenderSettings, build_camera, build_parser, settings_from_args
from pathtracer.errors import PathTracerError
from pathtracer.renderer.display import PygameDisplay
from pathtracer.renderer.encoder import ImageEncoder
from pathtracer.renderer.pipeline import RenderPipeline
from pathtracer.renderer.sampler import PixelSampler
from pathtracer.scenes import SCENES, build_scene

logger = logging.getLogger("pathtracer")


def render(settings: RenderSettings, world) -> None:
    camera = build_camera(settings)
    sampler = PixelSampler(world, camera, settings.width, settings.height,
                           samples_per_pixel=settings.samples_per_pixel,
                           max_depth=settings.max_depth, seed=settings.seed)
    display = PygameDisplay(settings.width, settings.height) if settings.preview else None
    try:
        pipeline = RenderPipeline(sampler, display=display,
                                  encoder=ImageEncoder(settings.output),
                                  workers=settings.workers,
                                  chunk_size=settings.chunk_size,
                                  present_interval=settings.present_interval,
                                  shuffle_seed=settings.seed,
                                  progress=settings.progress)
        pipeline.run()
        if display is not None:
            display.wait_until_closed()
    finally:
        if display is not None:
            display.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser(sorted(SCENES)).parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    try:
        scene = build_scene(args.scene, args.seed)
        settings = settings_from_args(args, scene.camera)
        render(settings, scene.world)
    except PathTracerError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
