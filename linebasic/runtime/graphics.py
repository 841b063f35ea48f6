"""
Drawing surface for SCREEN / PLOT.

The interpreter only ever calls ``initialize()`` and ``set_pixel()``. Any
object with those two methods can stand in for ``RasterCanvas``, for example
a window-backed surface supplied by a front end.
"""

import math
from typing import Optional

# SCREEN 13: 320x200 logical pixels, shown at 2x
MODE_13 = 13.0
MODE_13_WIDTH = 320
MODE_13_HEIGHT = 200
MODE_13_SCALE = 2

# Color indices are mapped onto gray levels by dividing by this
PALETTE_DIVISOR = 8.0


def color_intensity(color: float) -> float:
    """Map a PLOT color index onto a gray level in [0, 1]."""
    if math.isnan(color):
        return 0.0
    return max(0.0, min(1.0, color / PALETTE_DIVISOR))


class RasterCanvas:
    """In-memory grayscale canvas at display resolution."""

    def __init__(self):
        self.width = 0
        self.height = 0
        self.scale = 1
        self.pixels: Optional[bytearray] = None

    @property
    def initialized(self) -> bool:
        return self.pixels is not None

    @property
    def display_width(self) -> int:
        return self.width * self.scale

    @property
    def display_height(self) -> int:
        return self.height * self.scale

    def initialize(self, width: int = MODE_13_WIDTH, height: int = MODE_13_HEIGHT,
                   scale: int = MODE_13_SCALE):
        """Allocate a blank (black) canvas of width x height logical pixels."""
        self.width = width
        self.height = height
        self.scale = scale
        self.pixels = bytearray(self.display_width * self.display_height)

    def set_pixel(self, x: int, y: int, intensity: float):
        """Fill the scale x scale block for logical pixel (x, y).

        Pixels outside the canvas are ignored.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            return
        level = int(intensity * 255 + 0.5)
        stride = self.display_width
        for row in range(y * self.scale, (y + 1) * self.scale):
            start = row * stride + x * self.scale
            self.pixels[start:start + self.scale] = bytes([level]) * self.scale

    def get_pixel(self, px: int, py: int) -> int:
        """Gray level (0-255) at display coordinate (px, py)."""
        return self.pixels[py * self.display_width + px]

    def to_pgm(self) -> bytes:
        """Encode the canvas as a binary PGM (P5) image."""
        header = f"P5\n{self.display_width} {self.display_height}\n255\n".encode('ascii')
        return header + bytes(self.pixels)

    def save_pgm(self, path: str):
        with open(path, 'wb') as f:
            f.write(self.to_pgm())
