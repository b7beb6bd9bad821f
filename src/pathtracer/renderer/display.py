# renderer/display.py
import logging

import numpy as np

from pathtracer.errors import DisplayError

logger = logging.getLogger(__name__)


class Display:
    """
    Preview surface the pipeline presents to. Buffers are packed 0x00RRGGBB
    values, one per pixel, row-major with the top row first.
    """
    def update(self, buffer: np.ndarray, width: int, height: int):
        raise NotImplementedError("update() must be implemented by subclasses.")

    def is_open(self) -> bool:
        raise NotImplementedError("is_open() must be implemented by subclasses.")

    def close(self):
        pass


class NullDisplay(Display):
    """Headless display: remembers the last frame and never closes on its own."""
    def __init__(self):
        self.frames = 0
        self.last_frame = None
        self._open = True

    def update(self, buffer: np.ndarray, width: int, height: int):
        self.frames += 1
        self.last_frame = buffer

    def is_open(self) -> bool:
        return self._open

    def close(self):
        self._open = False


class PygameDisplay(Display):
    """
    Live preview window. Closing the window or pressing Escape marks the
    display closed; the render itself keeps going.
    """
    def __init__(self, width: int, height: int, title: str = "pathtracer", scale: int = 1):
        import pygame

        self._pygame = pygame
        self.width = width
        self.height = height
        self.scale = max(1, scale)
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((width * self.scale, height * self.scale))
            pygame.display.set_caption(title)
        except pygame.error as e:
            raise DisplayError(f"could not open preview window: {e}") from e
        # 0x00RRGGBB layout
        self.surface = pygame.Surface((width, height), 0, 32,
                                      (0xFF0000, 0x00FF00, 0x0000FF, 0))
        self._open = True
        logger.debug("Opened %dx%d preview window", width, height)

    def update(self, buffer: np.ndarray, width: int, height: int):
        if not self._open:
            return
        pygame = self._pygame
        # surfarray is indexed [x, y]
        frame = np.asarray(buffer, dtype=np.uint32).reshape(height, width).T
        pygame.surfarray.blit_array(self.surface, frame)
        if self.scale != 1:
            self.screen.blit(pygame.transform.scale(self.surface, self.screen.get_size()), (0, 0))
        else:
            self.screen.blit(self.surface, (0, 0))
        pygame.display.flip()

    def is_open(self) -> bool:
        if not self._open:
            return False
        pygame = self._pygame
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._open = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._open = False
        return self._open

    def wait_until_closed(self):
        """Keeps the finished image on screen until the user closes it."""
        clock = self._pygame.time.Clock()
        while self.is_open():
            clock.tick(30)

    def close(self):
        self._open = False
        self._pygame.quit()
