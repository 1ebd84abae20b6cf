# AsciiGif - Raster data model
"""
Raster and patch frame types shared by the decoder, compositor and resampler.

A :class:`RasterFrame` is a dense RGBA raster stored as a ``uint8`` numpy
array of shape ``(height, width, 4)``. Its byte form is row-major,
top-to-bottom, 4 bytes per pixel in R, G, B, A order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class DisposalMethod(IntEnum):
    """What happens to a frame's rectangle before the next frame is drawn."""

    UNSPECIFIED = 0
    DO_NOT_DISPOSE = 1
    RESTORE_TO_BACKGROUND = 2
    RESTORE_TO_PREVIOUS = 3

    @classmethod
    def from_tag(cls, tag: int | DisposalMethod | None) -> DisposalMethod:
        """Normalize a raw disposal tag.

        Absent, 0 and the reserved values 4-7 all mean "do not dispose".

        :param tag: Raw tag as found in the graphic control extension
        :return: One of DO_NOT_DISPOSE, RESTORE_TO_BACKGROUND, RESTORE_TO_PREVIOUS
        """
        if tag in (cls.RESTORE_TO_BACKGROUND, cls.RESTORE_TO_PREVIOUS):
            return cls(tag)
        return cls.DO_NOT_DISPOSE


@dataclass
class RasterFrame:
    """A full or partial RGBA raster.

    :ivar pixels: ``uint8`` array of shape (height, width, 4)
    """

    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(
                f"RGBA pixels of shape (height, width, 4) expected, got {pixels.shape}"
            )
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview, width: int, height: int) -> RasterFrame:
        """Create a raster from a flat RGBA buffer.

        :param data: width*height*4 bytes, row-major, channel order R,G,B,A
        :param width: Raster width in pixels
        :param height: Raster height in pixels
        :return: The raster
        """
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(
                f"RGBA buffer of {width}x{height} needs {expected} bytes, got {len(data)}"
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4)
        return cls(pixels.copy())

    @classmethod
    def blank(cls, width: int, height: int) -> RasterFrame:
        """Create a fully transparent raster."""
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    def to_bytes(self) -> bytes:
        """Flat RGBA buffer, row-major, channel order R,G,B,A."""
        return self.pixels.tobytes()

    def copy(self) -> RasterFrame:
        return RasterFrame(self.pixels.copy())


@dataclass
class PatchFrame:
    """One decoded delta unit of an animation.

    :ivar raster: Pixel data of the patch, None if the frame carries no pixels
    :ivar offset_x: Left placement within the logical canvas
    :ivar offset_y: Top placement within the logical canvas
    :ivar disposal: Disposal policy applied after the frame was shown
    :ivar delay_ms: Optional display duration in milliseconds
    """

    raster: RasterFrame | None
    offset_x: int = 0
    offset_y: int = 0
    disposal: DisposalMethod = DisposalMethod.DO_NOT_DISPOSE
    delay_ms: int | None = None

    def __post_init__(self):
        self.disposal = DisposalMethod.from_tag(self.disposal)

    @property
    def width(self) -> int:
        return self.raster.width if self.raster is not None else 0

    @property
    def height(self) -> int:
        return self.raster.height if self.raster is not None else 0

    def to_bbox(self) -> tuple[int, int, int, int]:
        """Return (x1, y1, x2, y2) bounding box tuple."""
        return (
            self.offset_x,
            self.offset_y,
            self.offset_x + self.width,
            self.offset_y + self.height,
        )


__all__ = ['DisposalMethod', 'RasterFrame', 'PatchFrame']
