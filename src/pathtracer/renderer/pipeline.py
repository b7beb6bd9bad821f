# renderer/pipeline.py
import logging
import multiprocessing
import os
import random
import time
from concurrent.futures import (
    FIRST_COMPLETED, BrokenExecutor, Future, ProcessPoolExecutor, wait,
)
from typing import Callable, List, NamedTuple, Optional, Tuple

from tqdm import tqdm

from pathtracer.errors import RenderCancelled, RenderError
from pathtracer.renderer.display import Display
from pathtracer.renderer.encoder import Encoder
from pathtracer.renderer.pixmap import PixMap
from pathtracer.renderer.sampler import PixelResult, PixelSampler

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 32

# Per-process state, installed once by the pool initializer.
_sampler: Optional[PixelSampler] = None
_abort = None


class _WorkerFailure(NamedTuple):
    x: int
    y: int
    error: BaseException


class _ChunkResult(NamedTuple):
    pixels: List[PixelResult]
    failure: Optional[_WorkerFailure]


def _install_worker(sampler: PixelSampler, abort) -> None:
    global _sampler, _abort
    _sampler = sampler
    _abort = abort


def _render_chunk(coords: List[Tuple[int, int]]) -> _ChunkResult:
    """Renders pixels until the chunk is done, a pixel fails or the render is aborted."""
    pixels = []
    for x, y in coords:
        if _abort.is_set():
            break
        try:
            pixels.append(_sampler.render_pixel(x, y))
        except Exception as e:
            return _ChunkResult(pixels, _WorkerFailure(x, y, e))
    return _ChunkResult(pixels, None)


class RenderPipeline:
    """
    Renders every pixel of `sampler` on a process pool and streams the results
    into a PixMap.

    The shuffled pixel order is cut into chunks; each worker process gets its
    own copy of the sampler once, at startup, and returns (x, y, rgb) triples
    per chunk in whatever order they finish. The thread calling run() is the
    only consumer: it writes the buffer, and at most once per
    `present_interval` seconds hands a packed copy to the display. When every
    chunk is in it presents the full buffer one last time and passes it to
    the encoder.
    """
    def __init__(self, sampler: PixelSampler, pixmap: Optional[PixMap] = None,
                 display: Optional[Display] = None, encoder: Optional[Encoder] = None,
                 workers: Optional[int] = None, present_interval: float = 0.1,
                 shuffle_seed: Optional[int] = None, progress: bool = False,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 clock: Callable[[], float] = time.monotonic):
        if chunk_size <= 0:
            raise RenderError(f"chunk size must be positive, got {chunk_size}")
        self.sampler = sampler
        self.pixmap = pixmap or PixMap(sampler.width, sampler.height)
        if (self.pixmap.width, self.pixmap.height) != (sampler.width, sampler.height):
            raise RenderError("pixel buffer and sampler disagree on image size")
        self.display = display
        self.encoder = encoder
        self.workers = workers or os.cpu_count() or 1
        self.present_interval = present_interval
        self.shuffle_seed = shuffle_seed
        self.progress = progress
        self.chunk_size = chunk_size
        self.clock = clock
        self.frames_presented = 0
        self._presenting = display is not None
        self._last_present = 0.0
        self._mp = multiprocessing.get_context()
        self._cancelled = self._mp.Event()

    def cancel(self):
        """Stops workers at the next pixel boundary; run() then raises RenderCancelled."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def pixel_order(self) -> List[Tuple[int, int]]:
        """All pixel coordinates, shuffled so neighbouring pixels spread over workers."""
        coords = [(x, y) for y in range(self.sampler.height) for x in range(self.sampler.width)]
        random.Random(self.shuffle_seed).shuffle(coords)
        return coords

    def chunks(self) -> List[List[Tuple[int, int]]]:
        order = self.pixel_order()
        return [order[i:i + self.chunk_size] for i in range(0, len(order), self.chunk_size)]

    def _present(self):
        if not self._presenting:
            return
        self.display.update(self.pixmap.to_hex(), self.pixmap.width, self.pixmap.height)
        self.frames_presented += 1
        if not self.display.is_open():
            logger.info("Preview closed; rendering continues without it")
            self._presenting = False

    def _tick(self):
        now = self.clock()
        if self._presenting and now - self._last_present >= self.present_interval:
            logger.debug("Presenting frame with %d pixels", self.pixmap.written)
            self._present()
            self._last_present = now

    def run(self) -> PixMap:
        width, height = self.sampler.width, self.sampler.height
        chunks = self.chunks()
        workers = min(self.workers, len(chunks))
        logger.info("Rendering %dx%d, %d samples/pixel, depth %d, %d workers, %d chunks",
                    width, height, self.sampler.samples_per_pixel,
                    self.sampler.max_depth, workers, len(chunks))
        start = time.perf_counter()

        executor = ProcessPoolExecutor(max_workers=workers, mp_context=self._mp,
                                       initializer=_install_worker,
                                       initargs=(self.sampler, self._cancelled))
        try:
            futures = [executor.submit(_render_chunk, chunk) for chunk in chunks]
            self._consume(futures)
        except BaseException:
            self._cancelled.set()
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        if self._cancelled.is_set():
            raise RenderCancelled(
                f"render cancelled with {self.pixmap.written} of {width * height} pixels done")
        if not self.pixmap.is_complete:
            raise RenderError(
                f"workers finished with {self.pixmap.written} of {width * height} pixels written")

        self._present()
        if self.encoder is not None:
            self.encoder.save(width, height, self.pixmap.pixels)

        logger.info("Rendered %d pixels in %.2fs", width * height, time.perf_counter() - start)
        return self.pixmap

    def _collect(self, future: Future, bar: tqdm):
        try:
            result = future.result()
        except BrokenExecutor as e:
            raise RenderError(f"worker process died: {e}") from e
        for x, y, rgb in result.pixels:
            self.pixmap.update(x, y, rgb)
        bar.update(len(result.pixels))
        if result.failure is not None:
            failure = result.failure
            raise RenderError(
                f"worker failed on pixel ({failure.x}, {failure.y}): {failure.error}"
            ) from failure.error

    def _consume(self, futures: List[Future]):
        self._last_present = self.clock()
        poll = max(self.present_interval, 0.01)
        pending = set(futures)
        with tqdm(total=self.sampler.width * self.sampler.height, unit="px",
                  desc="render", disable=not self.progress) as bar:
            while pending and not self._cancelled.is_set():
                done, pending = wait(pending, timeout=poll, return_when=FIRST_COMPLETED)
                for future in done:
                    if self._cancelled.is_set():
                        break
                    self._collect(future, bar)
                    self._tick()
                if not done:
                    self._tick()
