# renderer/encoder.py
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from pathtracer.errors import EncoderError

logger = logging.getLogger(__name__)


class Encoder:
    """Persists a finished RGB-8 buffer of shape (height, width, 3)."""
    def save(self, width: int, height: int, pixels: np.ndarray):
        raise NotImplementedError("save() must be implemented by subclasses.")


class ImageEncoder(Encoder):
    """
    Writes the image with Pillow; the format follows the file suffix
    (.png, .ppm, .jpg, ...).
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def save(self, width: int, height: int, pixels: np.ndarray):
        data = np.asarray(pixels, dtype=np.uint8)
        if data.shape != (height, width, 3):
            raise EncoderError(
                f"expected a {height}x{width}x3 buffer, got shape {data.shape}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            Image.fromarray(data).save(self.path)
        except (OSError, ValueError) as e:
            raise EncoderError(f"could not write {self.path}: {e}") from e
        logger.info("Saved %dx%d image to %s", width, height, self.path)
