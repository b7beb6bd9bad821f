import itertools
import math
import threading

import numpy as np
import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.errors import RenderCancelled, RenderError
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.renderer.display import Display, NullDisplay
from pathtracer.renderer.encoder import Encoder
from pathtracer.renderer import pipeline as pipeline_module
from pathtracer.renderer.pipeline import RenderPipeline
from pathtracer.renderer.pixmap import PixMap
from pathtracer.renderer.sampler import PixelSampler

WIDTH, HEIGHT = 8, 6


def make_sampler(seed=42, samples=2):
    world = World()
    world.add(Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Vector3(0.8, 0.8, 0.0))))
    world.add(Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.1, 0.2, 0.5))))
    world.add(Sphere(Vector3(1, 0, -1), 0.5, Metal(Vector3(0.8, 0.6, 0.2), fuzz=0.3)))
    world.add(Sphere(Vector3(-1, 0, -1), 0.5, Dielectric(1.5)))
    world.add(Sphere(Vector3(-1, 0, -1), -0.4, Dielectric(1.5)))
    camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), WIDTH / HEIGHT, math.radians(90),
                    aperture=0.05, shutter_close=1.0)
    return PixelSampler(world, camera, WIDTH, HEIGHT, samples_per_pixel=samples,
                        max_depth=4, seed=seed)


class RecordingEncoder(Encoder):
    def __init__(self):
        self.calls = []

    def save(self, width, height, pixels):
        self.calls.append((width, height, pixels))


class ClosingDisplay(Display):
    """Closes as soon as the first frame is shown."""
    def __init__(self):
        self.frames = 0

    def update(self, buffer, width, height):
        self.frames += 1

    def is_open(self):
        return False


class BrokenSampler(PixelSampler):
    """Fails on one pixel. Defined at module level so worker processes can unpickle it."""
    def render_pixel(self, x, y):
        if (x, y) == (3, 2):
            raise ZeroDivisionError("boom")
        return super().render_pixel(x, y)


class CancellingDisplay(NullDisplay):
    """Cancels the render from the consumer the first time a frame is shown."""
    def __init__(self):
        super().__init__()
        self.pipeline = None

    def update(self, buffer, width, height):
        super().update(buffer, width, height)
        self.pipeline.cancel()


def test_every_pixel_written_once_and_matches_sequential_render():
    sampler = make_sampler()
    pixmap = RenderPipeline(sampler, workers=4, shuffle_seed=1).run()
    assert pixmap.is_complete
    assert pixmap.written == WIDTH * HEIGHT

    expected = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
    for y in range(HEIGHT):
        for x in range(WIDTH):
            expected[y, x] = sampler.render_pixel(x, y)[2]
    assert np.array_equal(pixmap.pixels, expected)


def test_worker_count_and_dispatch_order_do_not_change_the_image():
    single = RenderPipeline(make_sampler(), workers=1, shuffle_seed=1).run()
    multi = RenderPipeline(make_sampler(), workers=6, shuffle_seed=2).run()
    assert np.array_equal(single.pixels, multi.pixels)


def test_pixel_order_is_a_shuffled_cover():
    pipeline = RenderPipeline(make_sampler(), shuffle_seed=3)
    order = pipeline.pixel_order()
    all_coords = [(x, y) for y in range(HEIGHT) for x in range(WIDTH)]
    assert sorted(order) == sorted(all_coords)
    assert order != all_coords


def test_final_frame_presented_and_image_encoded():
    display = NullDisplay()
    encoder = RecordingEncoder()
    pipeline = RenderPipeline(make_sampler(), display=display, encoder=encoder,
                              workers=2, present_interval=1e6)
    pixmap = pipeline.run()
    # The interval never elapses, so only the final full frame is shown.
    assert display.frames == 1
    assert np.array_equal(display.last_frame, pixmap.to_hex())
    assert len(encoder.calls) == 1
    width, height, pixels = encoder.calls[0]
    assert (width, height) == (WIDTH, HEIGHT)
    assert np.array_equal(pixels, pixmap.pixels)


def test_presentation_is_throttled_by_clock():
    display = NullDisplay()
    ticks = itertools.count(step=0.25)
    pipeline = RenderPipeline(make_sampler(), display=display, workers=2, chunk_size=1,
                              present_interval=1.0, clock=lambda: next(ticks))
    pipeline.run()
    # The clock advances a quarter interval per consumed chunk.
    assert 1 < display.frames < WIDTH * HEIGHT // 2
    assert pipeline.frames_presented == display.frames


def test_closed_display_stops_presentation_but_render_finishes():
    display = ClosingDisplay()
    encoder = RecordingEncoder()
    ticks = itertools.count()
    pipeline = RenderPipeline(make_sampler(), display=display, encoder=encoder, workers=3,
                              chunk_size=4, present_interval=0.5, clock=lambda: next(ticks))
    pixmap = pipeline.run()
    assert display.frames == 1
    assert pipeline.frames_presented == 1
    assert pixmap.is_complete
    assert len(encoder.calls) == 1


@pytest.mark.parametrize("chunk_size", [1, 5, WIDTH * HEIGHT, 1000])
def test_chunks_cover_every_pixel_once(chunk_size):
    pipeline = RenderPipeline(make_sampler(), chunk_size=chunk_size, shuffle_seed=4)
    chunks = pipeline.chunks()
    assert all(0 < len(chunk) <= chunk_size for chunk in chunks)
    assert [c for chunk in chunks for c in chunk] == pipeline.pixel_order()


def test_chunk_size_does_not_change_the_image():
    small = RenderPipeline(make_sampler(), workers=2, chunk_size=1).run()
    large = RenderPipeline(make_sampler(), workers=2, chunk_size=WIDTH * HEIGHT).run()
    assert np.array_equal(small.pixels, large.pixels)


def test_chunk_size_must_be_positive():
    with pytest.raises(RenderError):
        RenderPipeline(make_sampler(), chunk_size=0)


def test_worker_failure_is_fatal():
    base = make_sampler()
    sampler = BrokenSampler(base.world, base.camera, WIDTH, HEIGHT,
                            samples_per_pixel=1, max_depth=2, seed=1)
    encoder = RecordingEncoder()
    with pytest.raises(RenderError, match=r"pixel \(3, 2\)") as excinfo:
        RenderPipeline(sampler, encoder=encoder, workers=2, chunk_size=4).run()
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
    assert encoder.calls == []


def test_cancel_skips_remaining_pixels():
    encoder = RecordingEncoder()
    pipeline = RenderPipeline(make_sampler(), encoder=encoder, workers=2)
    pipeline.cancel()
    with pytest.raises(RenderCancelled):
        pipeline.run()
    assert pipeline.cancelled
    assert pipeline.pixmap.written == 0
    assert encoder.calls == []


def test_cancel_during_render_stops_remaining_pixels():
    base = make_sampler()
    sampler = PixelSampler(base.world, base.camera, 64, 64, samples_per_pixel=4,
                           max_depth=4, seed=1)
    display = CancellingDisplay()
    encoder = RecordingEncoder()
    ticks = itertools.count()
    pipeline = RenderPipeline(sampler, display=display, encoder=encoder, workers=2,
                              chunk_size=1, present_interval=0.5, clock=lambda: next(ticks))
    display.pipeline = pipeline
    with pytest.raises(RenderCancelled):
        pipeline.run()
    assert display.frames == 1
    assert pipeline.pixmap.written < 64 * 64
    assert encoder.calls == []


def test_chunk_stops_at_pixel_boundary_once_aborted():
    sampler = make_sampler()
    abort = threading.Event()
    pipeline_module._install_worker(sampler, abort)
    coords = [(0, 0), (1, 0), (2, 0)]
    result = pipeline_module._render_chunk(coords)
    assert [p[:2] for p in result.pixels] == coords
    assert result.failure is None

    abort.set()
    assert pipeline_module._render_chunk(coords).pixels == []


def test_chunk_reports_failing_pixel_with_partial_results():
    base = make_sampler()
    sampler = BrokenSampler(base.world, base.camera, WIDTH, HEIGHT,
                            samples_per_pixel=1, max_depth=2, seed=1)
    pipeline_module._install_worker(sampler, threading.Event())
    result = pipeline_module._render_chunk([(2, 2), (3, 2), (4, 2)])
    assert [p[:2] for p in result.pixels] == [(2, 2)]
    assert (result.failure.x, result.failure.y) == (3, 2)
    assert isinstance(result.failure.error, ZeroDivisionError)


def test_buffer_size_must_match_sampler():
    with pytest.raises(RenderError):
        RenderPipeline(make_sampler(), pixmap=PixMap(WIDTH + 1, HEIGHT))
