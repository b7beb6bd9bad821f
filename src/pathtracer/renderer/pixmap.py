# renderer/pixmap.py
import numpy as np

from pathtracer.core.color import RGB8
from pathtracer.errors import RenderError


class PixMap:
    """
    Dense width x height RGB-8 buffer, row-major with the top row first.

    Each slot is written exactly once; readers (display, encoder) only ever
    take copies.
    """
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self._written = np.zeros((height, width), dtype=bool)
        self.written = 0

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def is_complete(self) -> bool:
        return self.written == self.width * self.height

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels.copy()

    def update(self, x: int, y: int, color: RGB8):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise RenderError(f"pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        if self._written[y, x]:
            raise RenderError(f"pixel ({x}, {y}) written twice")
        self._pixels[y, x] = np.clip(color, 0, 255)
        self._written[y, x] = True
        self.written += 1

    def to_hex(self) -> np.ndarray:
        """Packed 0x00RRGGBB values, one uint32 per pixel, row-major."""
        p = self._pixels.astype(np.uint32)
        return ((p[..., 0] << 16) | (p[..., 1] << 8) | p[..., 2]).ravel()

    def to_ppm(self) -> str:
        """Plain-text P3 rendering of the buffer."""
        lines = [f"P3\n{self.width} {self.height}\n255"]
        for r, g, b in self._pixels.reshape(-1, 3):
            lines.append(f"{r} {g} {b}")
        return "\n".join(lines) + "\n"
