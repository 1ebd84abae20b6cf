"""
Frame Compositor - Reconstruct full frames from delta-encoded patches.

GIF frames are patches placed somewhere on a persistent logical canvas. The
compositor writes each patch onto the canvas, snapshots the whole canvas as
the displayed frame and then applies the patch's disposal policy so the
canvas is ready for the next patch.

The canvas is passed in and handed back explicitly, nothing is kept between
calls:

    compositor = FrameCompositor()
    canvas = compositor.new_canvas(width, height)
    for patch in patches:
        canvas, snapshot = compositor.apply(canvas, patch)

Disposal policies:
    - DO_NOT_DISPOSE: the canvas stays as it is
    - RESTORE_TO_BACKGROUND: the patch rectangle is cleared to transparent
    - RESTORE_TO_PREVIOUS: cleared like RESTORE_TO_BACKGROUND unless the
      compositor was created with ``restore_previous=True``, in which case
      the rectangle is restored to its contents from before the patch write
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .raster import DisposalMethod, PatchFrame, RasterFrame

logger = logging.getLogger(__name__)


@dataclass
class LogicalCanvas:
    """The full-size RGBA raster an animation renders onto.

    :ivar pixels: ``uint8`` array of shape (height, width, 4), mutated in place
    """

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def snapshot(self) -> RasterFrame:
        """Read-only copy of the whole canvas."""
        pixels = self.pixels.copy()
        pixels.flags.writeable = False
        return RasterFrame(pixels)


def clip_rect(
    canvas_width: int,
    canvas_height: int,
    x: int,
    y: int,
    width: int,
    height: int,
) -> tuple[tuple[slice, slice], tuple[slice, slice]] | None:
    """
    Intersect a placed rectangle with the canvas.

    :return: ((canvas_rows, canvas_cols), (patch_rows, patch_cols)) slices,
        or None if nothing of the rectangle is on the canvas
    """
    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(canvas_width, x + width), min(canvas_height, y + height)
    if x2 <= x1 or y2 <= y1:
        return None
    canvas_slices = (slice(y1, y2), slice(x1, x2))
    patch_slices = (slice(y1 - y, y2 - y), slice(x1 - x, x2 - x))
    return canvas_slices, patch_slices


class FrameCompositor:
    """Apply patch frames to a logical canvas, honoring disposal."""

    def __init__(self, restore_previous: bool = False):
        """
        :param restore_previous: Restore the rectangle of RESTORE_TO_PREVIOUS
            frames to its prior contents instead of clearing it. This changes
            output compared to the default clearing behavior.
        """
        self.restore_previous = restore_previous

    @staticmethod
    def new_canvas(width: int, height: int) -> LogicalCanvas:
        """Create a fully transparent canvas (sizes clamped to at least 1)."""
        width, height = max(1, int(width)), max(1, int(height))
        return LogicalCanvas(np.zeros((height, width, 4), dtype=np.uint8))

    def apply(
        self, canvas: LogicalCanvas, patch: PatchFrame
    ) -> tuple[LogicalCanvas, RasterFrame]:
        """
        Composite one patch and produce the displayed frame.

        :param canvas: The canvas, consumed and returned updated
        :param patch: The next patch in source order
        :return: (canvas ready for the next patch, snapshot of this frame)
        """
        rect = clip_rect(
            canvas.width,
            canvas.height,
            patch.offset_x,
            patch.offset_y,
            patch.width,
            patch.height,
        )
        if patch.raster is not None and rect is None:
            logger.debug(
                f"Patch at ({patch.offset_x}, {patch.offset_y}) size "
                f"{patch.width}x{patch.height} lies outside the "
                f"{canvas.width}x{canvas.height} canvas"
            )

        backup = None
        if rect is not None:
            canvas_slices, patch_slices = rect
            if (
                self.restore_previous
                and patch.disposal == DisposalMethod.RESTORE_TO_PREVIOUS
            ):
                backup = canvas.pixels[canvas_slices].copy()
            # Overwrite, no blending
            canvas.pixels[canvas_slices] = patch.raster.pixels[patch_slices]

        snapshot = canvas.snapshot()
        if rect is not None:
            self.dispose(canvas, patch.disposal, rect[0], backup)
        return canvas, snapshot

    @staticmethod
    def dispose(
        canvas: LogicalCanvas,
        disposal: DisposalMethod,
        canvas_slices: tuple[slice, slice],
        backup: np.ndarray | None = None,
    ) -> None:
        """
        Apply a disposal policy to a canvas region.

        :param canvas: Canvas to modify in place
        :param disposal: The policy of the frame just shown
        :param canvas_slices: (rows, cols) of the frame's rectangle
        :param backup: Prior contents of the rectangle for RESTORE_TO_PREVIOUS
        """
        if disposal == DisposalMethod.RESTORE_TO_BACKGROUND:
            canvas.pixels[canvas_slices] = 0
        elif disposal == DisposalMethod.RESTORE_TO_PREVIOUS:
            if backup is not None:
                canvas.pixels[canvas_slices] = backup
            else:
                canvas.pixels[canvas_slices] = 0


__all__ = ["LogicalCanvas", "FrameCompositor", "clip_rect"]
