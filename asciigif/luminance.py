"""
Luminance Mapper - Map pixels to glyphs of a fixed dark-to-light palette.

The relative luminance ``0.2126 R + 0.7152 G + 0.0722 B`` of a pixel is
normalized to ``[0, 1]`` and quantized onto :data:`PALETTE`. Pixels whose
alpha is below the alpha threshold short-circuit to a blank.

Example:
    from asciigif.luminance import map_pixel

    map_pixel(0, 0, 0)          # '@'
    map_pixel(255, 255, 255)    # ' '
    map_pixel(0, 0, 0, a=0)     # ' ' (transparent)
"""

from __future__ import annotations

import logging
import math

import numpy as np

logger = logging.getLogger(__name__)

# Character set ordered from dark to bright
PALETTE = "@%#*+=-:. "
BLANK = " "

DEFAULT_ALPHA_THRESHOLD = 16

# Rec. 709 luma coefficients
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722

_PALETTE_ARRAY = np.array(list(PALETTE), dtype="U1")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding towards +infinity."""
    return int(math.floor(value + 0.5))


def clamp_alpha_threshold(alpha_threshold: int) -> int:
    """Clamp an alpha threshold into the valid 0-255 range."""
    clamped = max(0, min(255, int(alpha_threshold)))
    if clamped != alpha_threshold:
        logger.debug(f"Alpha threshold {alpha_threshold} clamped to {clamped}")
    return clamped


def luminance(r: int, g: int, b: int) -> float:
    """Relative luminance of an RGB triple, normalized to 0.0-1.0."""
    return (LUMA_R * r + LUMA_G * g + LUMA_B * b) / 255


def palette_index(r: int, g: int, b: int) -> int:
    """Index into :data:`PALETTE` for an RGB triple."""
    index = round_half_up(luminance(r, g, b) * (len(PALETTE) - 1))
    return max(0, min(len(PALETTE) - 1, index))


def map_pixel(
    r: int,
    g: int,
    b: int,
    a: int = 255,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
) -> str:
    """
    Map a single pixel to a palette glyph.

    :param r: Red channel 0-255
    :param g: Green channel 0-255
    :param b: Blue channel 0-255
    :param a: Alpha channel 0-255 (opaque if omitted)
    :param alpha_threshold: Pixels with alpha below this render as a blank
    :return: One character of :data:`PALETTE`
    """
    if a < alpha_threshold:
        return BLANK
    return PALETTE[palette_index(r, g, b)]


def map_pixels(
    pixels: np.ndarray,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
) -> np.ndarray:
    """
    Map an RGB or RGBA pixel array to an array of glyphs.

    Gives the same glyph as :func:`map_pixel` for every pixel.

    :param pixels: Array of shape (height, width, 3) or (height, width, 4)
    :param alpha_threshold: Pixels with alpha below this render as a blank
    :return: Unicode array of shape (height, width)
    """
    pixels = np.asarray(pixels)
    rgb = pixels[:, :, :3].astype(np.float64)
    lum = (LUMA_R * rgb[:, :, 0] + LUMA_G * rgb[:, :, 1] + LUMA_B * rgb[:, :, 2]) / 255
    indices = np.floor(lum * (len(PALETTE) - 1) + 0.5).astype(np.int32)
    indices = np.clip(indices, 0, len(PALETTE) - 1)

    chars = _PALETTE_ARRAY[indices]
    if pixels.shape[2] == 4:
        chars[pixels[:, :, 3] < alpha_threshold] = BLANK
    return chars


__all__ = [
    "PALETTE",
    "BLANK",
    "DEFAULT_ALPHA_THRESHOLD",
    "round_half_up",
    "clamp_alpha_threshold",
    "luminance",
    "palette_index",
    "map_pixel",
    "map_pixels",
]
