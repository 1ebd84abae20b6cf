"""GIF decoder adapter.

Bitstream decoding (block parsing, LZW) is done by Pillow's GIF plugin. This
module only turns Pillow's frames into :class:`PatchFrame` records: the
update rectangle of each frame, its placement, disposal method and delay.

Example:
    from asciigif.decoder import decode_gif

    decoded = decode_gif("animation.gif")
    print(decoded.width, decoded.height, len(decoded.frames))
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import PIL.Image
from PIL import ImageSequence, UnidentifiedImageError

from .exceptions import DecodeError
from .raster import DisposalMethod, PatchFrame, RasterFrame

logger = logging.getLogger(__name__)


@dataclass
class DecodedGif:
    """Logical canvas size and patch frames of a decoded animation.

    :ivar width: Logical canvas width
    :ivar height: Logical canvas height
    :ivar frames: Patches in source order
    :ivar loop: Netscape loop count (0 = forever), None if not given
    """

    width: int
    height: int
    frames: list[PatchFrame] = field(default_factory=list)
    loop: int | None = None

    @property
    def total_duration_ms(self) -> int:
        """Sum of all known frame delays."""
        return sum(f.delay_ms or 0 for f in self.frames)


def _frame_to_patch(
    frame: PIL.Image.Image, logical_width: int, logical_height: int
) -> PatchFrame:
    """Crop a decoded frame to its update rectangle."""
    rgba = np.asarray(frame.convert("RGBA"))
    x0, y0, x1, y1 = getattr(frame, "dispose_extent", None) or (
        0,
        0,
        frame.width,
        frame.height,
    )
    x0, y0 = max(0, x0), max(0, y0)
    x1 = min(x1, rgba.shape[1], logical_width)
    y1 = min(y1, rgba.shape[0], logical_height)
    if x1 <= x0 or y1 <= y0:
        raster = None
    else:
        raster = RasterFrame(rgba[y0:y1, x0:x1].copy())

    duration = frame.info.get("duration")
    return PatchFrame(
        raster=raster,
        offset_x=x0,
        offset_y=y0,
        disposal=DisposalMethod.from_tag(getattr(frame, "disposal_method", 0)),
        delay_ms=int(duration) if duration is not None else None,
    )


def decode_gif(source: str | Path | bytes) -> DecodedGif:
    """
    Decode an animated image into patch frames.

    Still images yield a single patch covering the whole canvas.

    :param source: File path or raw bytes
    :return: The decoded animation
    :raises DecodeError: If the source can not be read or decoded
    """
    if isinstance(source, (bytes, bytearray)):
        fp = io.BytesIO(source)
        name = "<bytes>"
    else:
        fp = Path(source)
        name = str(source)

    try:
        with PIL.Image.open(fp) as image:
            width, height = image.size
            decoded = DecodedGif(width=width, height=height, loop=image.info.get("loop"))
            for frame in ImageSequence.Iterator(image):
                decoded.frames.append(_frame_to_patch(frame, width, height))
    except (
        UnidentifiedImageError,
        PIL.Image.DecompressionBombError,
        OSError,
        EOFError,
        SyntaxError,
    ) as e:
        raise DecodeError(f"Could not decode {name}: {e}") from e

    logger.debug(
        f"Decoded {name}: {len(decoded.frames)} frames on a {width}x{height} canvas"
    )
    return decoded


__all__ = ["DecodedGif", "decode_gif"]
