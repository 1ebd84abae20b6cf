"""
Grid Resampler - Convert full raster frames into character grids.

The raster is scaled down to the target character grid with OpenCV's area
interpolation and each resulting pixel is mapped through the luminance
mapper. Terminal glyphs are roughly twice as tall as wide, so the grid height
is compressed by :data:`CHAR_ASPECT`.

Example:
    from asciigif.raster import RasterFrame
    from asciigif.resampler import GridResampler

    resampler = GridResampler(width=80)
    grid = resampler.resample(raster)
    print("\\n".join(grid))
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from .luminance import (
    DEFAULT_ALPHA_THRESHOLD,
    clamp_alpha_threshold,
    map_pixels,
    round_half_up,
)
from .raster import RasterFrame

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80

# Height/width ratio compensation for terminal glyphs
CHAR_ASPECT = 0.5

CharacterGrid = tuple[str, ...]
"One animation frame as rows of glyphs, top to bottom"


def grid_size(source_width: int, source_height: int, width: int) -> tuple[int, int]:
    """
    Compute the character grid size for a raster.

    :param source_width: Raster width in pixels
    :param source_height: Raster height in pixels
    :param width: Requested grid width in characters
    :return: (width, height) in characters, both at least 1
    """
    width = max(1, int(width))
    source_width = max(1, source_width)
    height = round_half_up(source_height / source_width * width * CHAR_ASPECT)
    return width, max(1, height)


class GridResampler:
    """
    Downsample rasters to a fixed-width character grid.

    The same raster and width always produce the identical grid.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
    ):
        """
        :param width: Output width in characters (clamped to at least 1)
        :param alpha_threshold: Pixels with alpha below this render as a blank
        """
        if width < 1:
            logger.debug(f"Output width {width} clamped to 1")
        self.width = max(1, int(width))
        self.alpha_threshold = clamp_alpha_threshold(alpha_threshold)

    def grid_size(self, raster: RasterFrame) -> tuple[int, int]:
        """Character grid (width, height) for given raster."""
        return grid_size(raster.width, raster.height, self.width)

    def scale(self, raster: RasterFrame) -> np.ndarray:
        """
        Scale a raster to one pixel per character.

        :param raster: Full source raster
        :return: RGBA array of shape (grid_height, grid_width, 4)
        """
        target_width, target_height = self.grid_size(raster)
        if (raster.width, raster.height) == (target_width, target_height):
            return raster.pixels
        # Average with premultiplied alpha so transparent pixels add no color
        pixels = raster.pixels.astype(np.float64)
        pixels[..., :3] *= pixels[..., 3:4] / 255.0
        scaled = cv2.resize(
            pixels,
            dsize=(target_width, target_height),
            interpolation=cv2.INTER_AREA,
        )
        alpha = scaled[..., 3:4] / 255.0
        scaled[..., :3] = np.divide(
            scaled[..., :3],
            alpha,
            out=np.zeros_like(scaled[..., :3]),
            where=alpha > 0,
        )
        return np.clip(np.floor(scaled + 0.5), 0, 255).astype(np.uint8)

    def resample(self, raster: RasterFrame) -> CharacterGrid:
        """
        Render a raster as a character grid.

        :param raster: Full source raster
        :return: Tuple of equal-length rows, top to bottom
        """
        chars = map_pixels(self.scale(raster), alpha_threshold=self.alpha_threshold)
        return tuple("".join(row) for row in chars)


__all__ = ["CharacterGrid", "CHAR_ASPECT", "DEFAULT_WIDTH", "GridResampler", "grid_size"]
