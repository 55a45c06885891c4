"""
Framebuffer and image output.

A Bitmap stores 24-bit pixels addressed as (x, y), where x follows the
camera's horizontal sample offset (world +y) and y its vertical one
(world +z). Conversion to a viewable image flips both axes so that +z
ends up at the top and +y on the left, as seen from the camera.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union
import numpy as np

from .color import Color, BLUE
from .errors import InvariantError


class Bitmap:
    """A width x height grid of colors backed by a numpy uint8 array."""

    def __init__(self, width: int, height: int, background: Color = BLUE):
        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = background.as_tuple()

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvariantError(f"Pixel ({x}, {y}) out of bounds")

    def at(self, x: int, y: int) -> Color:
        self._check(x, y)
        r, g, b = self.pixels[y, x]
        return Color(int(r), int(g), int(b))

    def set(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        self.pixels[y, x] = color.as_tuple()

    def paste(self, x0: int, y0: int, block: np.ndarray) -> None:
        """Copy a (rows, columns, 3) block with its first pixel at (x0, y0)."""
        rows, columns = block.shape[:2]
        if x0 < 0 or y0 < 0 or x0 + columns > self.width or y0 + rows > self.height:
            raise InvariantError(f"Block of {columns}x{rows} does not fit at ({x0}, {y0})")
        self.pixels[y0:y0 + rows, x0:x0 + columns] = block

    def to_image(self):
        """Build a Pillow image oriented for viewing."""
        from PIL import Image as PILImage

        oriented = np.ascontiguousarray(self.pixels[::-1, ::-1])
        return PILImage.fromarray(oriented, 'RGB')

    def save(self, filename: Union[str, Path]) -> None:
        """Save image to file (extension determines format)."""
        self.to_image().save(filename)
