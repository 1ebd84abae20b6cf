"""
AsciiGif - Convert animated GIFs into terminal character animations
"""

from .exceptions import AsciiGifError, DecodeError, SequenceFormatError
from .raster import DisposalMethod, RasterFrame, PatchFrame
from .luminance import PALETTE, map_pixel, map_pixels
from .resampler import CharacterGrid, GridResampler
from .compositor import FrameCompositor, LogicalCanvas
from .sequence import AnimationSequence
from .assembler import AnimationAssembler, convert, convert_gif
from .decoder import DecodedGif, decode_gif
from .playback import ClockHandle, PlaybackClock, PlaybackState

__all__ = [
    # Errors
    "AsciiGifError",
    "DecodeError",
    "SequenceFormatError",
    # Data model
    "DisposalMethod",
    "RasterFrame",
    "PatchFrame",
    "CharacterGrid",
    "AnimationSequence",
    # Pipeline
    "PALETTE",
    "map_pixel",
    "map_pixels",
    "GridResampler",
    "FrameCompositor",
    "LogicalCanvas",
    "AnimationAssembler",
    "convert",
    "convert_gif",
    # Decoding
    "DecodedGif",
    "decode_gif",
    # Playback
    "ClockHandle",
    "PlaybackClock",
    "PlaybackState",
]

__version__ = "0.1.0"
