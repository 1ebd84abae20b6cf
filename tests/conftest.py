"""
Pytest fixtures for AsciiGif tests
"""

import io

import numpy as np
import PIL.Image
import pytest

from asciigif import DisposalMethod, PatchFrame, RasterFrame

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def solid_raster(width: int, height: int, rgba=BLACK) -> RasterFrame:
    """Create a raster filled with one color."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return RasterFrame(pixels)


@pytest.fixture
def make_raster():
    """Factory for solid color rasters."""
    return solid_raster


@pytest.fixture
def make_patch():
    """Factory for solid color patch frames."""

    def factory(
        width: int,
        height: int,
        rgba=BLACK,
        x: int = 0,
        y: int = 0,
        disposal: DisposalMethod = DisposalMethod.DO_NOT_DISPOSE,
        delay_ms: int | None = None,
    ) -> PatchFrame:
        return PatchFrame(
            raster=solid_raster(width, height, rgba),
            offset_x=x,
            offset_y=y,
            disposal=disposal,
            delay_ms=delay_ms,
        )

    return factory


@pytest.fixture
def two_frame_patches(make_patch) -> list[PatchFrame]:
    """Black 4x4 frame followed by a white 2x2 frame at (1, 1)."""
    return [
        make_patch(4, 4, BLACK, disposal=DisposalMethod.DO_NOT_DISPOSE),
        make_patch(2, 2, WHITE, x=1, y=1, disposal=DisposalMethod.RESTORE_TO_BACKGROUND),
    ]


@pytest.fixture
def gif_bytes():
    """Factory encoding solid color frames as an animated GIF."""

    def factory(colors, size=(8, 8), duration=100, disposal=1) -> bytes:
        frames = [PIL.Image.new("RGB", size, color) for color in colors]
        buffer = io.BytesIO()
        frames[0].save(
            buffer,
            format="GIF",
            save_all=True,
            append_images=frames[1:],
            duration=duration,
            loop=0,
            disposal=disposal,
        )
        return buffer.getvalue()

    return factory
