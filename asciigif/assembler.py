"""
Animation Assembler - Turn a list of patch frames into an AnimationSequence.

Example:
    from asciigif import convert

    sequence = convert(patches, logical_width=64, logical_height=64, output_width=40)
    for grid in sequence:
        print("\\n".join(grid))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .compositor import FrameCompositor
from .decoder import decode_gif
from .luminance import DEFAULT_ALPHA_THRESHOLD
from .raster import PatchFrame
from .resampler import DEFAULT_WIDTH, GridResampler
from .sequence import AnimationSequence

logger = logging.getLogger(__name__)


class AnimationAssembler:
    """Drive the compositor and resampler across all frames in one pass.

    Frames are neither reordered nor dropped; grid ``i`` only depends on
    patches ``0..i``.
    """

    def __init__(
        self,
        output_width: int = DEFAULT_WIDTH,
        alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
        restore_previous: bool = False,
    ):
        """
        :param output_width: Grid width in characters
        :param alpha_threshold: Pixels with alpha below this render as a blank
        :param restore_previous: Use true previous-frame restoration for
            RESTORE_TO_PREVIOUS frames
        """
        self.compositor = FrameCompositor(restore_previous=restore_previous)
        self.resampler = GridResampler(width=output_width, alpha_threshold=alpha_threshold)

    def assemble(
        self,
        patch_frames: Iterable[PatchFrame],
        logical_width: int,
        logical_height: int,
    ) -> AnimationSequence:
        """
        Convert all patch frames.

        :param patch_frames: Decoded patches in source order
        :param logical_width: Canvas width in pixels
        :param logical_height: Canvas height in pixels
        :return: One character grid per patch
        """
        sequence = AnimationSequence()
        canvas = self.compositor.new_canvas(logical_width, logical_height)
        for patch in patch_frames:
            canvas, snapshot = self.compositor.apply(canvas, patch)
            sequence.append(self.resampler.resample(snapshot), delay_ms=patch.delay_ms)
        logger.debug(
            f"Assembled {len(sequence)} frames of {sequence.width}x{sequence.height} "
            f"characters from a {canvas.width}x{canvas.height} canvas"
        )
        return sequence


def convert(
    patch_frames: Iterable[PatchFrame],
    logical_width: int,
    logical_height: int,
    output_width: int = DEFAULT_WIDTH,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
    restore_previous: bool = False,
) -> AnimationSequence:
    """
    Convert decoded patch frames into character grids.

    :param patch_frames: Decoded patches in source order
    :param logical_width: Canvas width in pixels
    :param logical_height: Canvas height in pixels
    :param output_width: Grid width in characters
    :param alpha_threshold: Pixels with alpha below this render as a blank
    :param restore_previous: Use true previous-frame restoration
    :return: The animation sequence, empty for empty input
    """
    assembler = AnimationAssembler(
        output_width=output_width,
        alpha_threshold=alpha_threshold,
        restore_previous=restore_previous,
    )
    return assembler.assemble(patch_frames, logical_width, logical_height)


def convert_gif(
    source: str | Path | bytes,
    output_width: int = DEFAULT_WIDTH,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
    restore_previous: bool = False,
) -> AnimationSequence:
    """
    Decode a GIF file or buffer and convert it.

    :param source: Path to a GIF or its raw bytes
    :raises DecodeError: If the source can not be decoded
    """
    decoded = decode_gif(source)
    return convert(
        decoded.frames,
        decoded.width,
        decoded.height,
        output_width=output_width,
        alpha_threshold=alpha_threshold,
        restore_previous=restore_previous,
    )


__all__ = ["AnimationAssembler", "convert", "convert_gif"]
