"""
Tests for the FrameCompositor class.
"""

import numpy as np
import pytest

from asciigif import DisposalMethod, FrameCompositor, PatchFrame, RasterFrame
from asciigif.compositor import clip_rect

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def red_canvas(make_patch):
    """A 6x4 canvas filled with opaque red."""
    compositor = FrameCompositor()
    canvas = compositor.new_canvas(6, 4)
    canvas, _ = compositor.apply(canvas, make_patch(6, 4, RED))
    return canvas


class TestCanvas:
    """Tests for canvas creation and snapshots."""

    def test_new_canvas_is_transparent(self):
        canvas = FrameCompositor.new_canvas(5, 3)
        assert canvas.pixels.shape == (3, 5, 4)
        assert (canvas.pixels == 0).all()

    def test_new_canvas_clamps_size(self):
        canvas = FrameCompositor.new_canvas(0, -2)
        assert (canvas.width, canvas.height) == (1, 1)

    def test_snapshot_is_independent_copy(self, red_canvas):
        snapshot = red_canvas.snapshot()
        red_canvas.pixels[:] = 0
        assert (snapshot.pixels[:, :, 0] == 255).all()
        assert not snapshot.pixels.flags.writeable


class TestPatchWrite:
    """Tests for writing patches onto the canvas."""

    def test_patch_written_at_offset(self, red_canvas, make_patch):
        canvas, snapshot = FrameCompositor().apply(red_canvas, make_patch(2, 1, BLUE, x=3, y=2))
        assert tuple(snapshot.pixels[2, 3]) == BLUE
        assert tuple(snapshot.pixels[2, 4]) == BLUE
        assert tuple(snapshot.pixels[2, 5]) == RED
        assert tuple(snapshot.pixels[1, 3]) == RED

    def test_overwrite_does_not_blend(self, red_canvas):
        """Transparent patch pixels replace opaque canvas pixels."""
        patch = PatchFrame(RasterFrame.blank(2, 2), offset_x=0, offset_y=0)
        _, snapshot = FrameCompositor().apply(red_canvas, patch)
        assert (snapshot.pixels[:2, :2] == 0).all()
        assert tuple(snapshot.pixels[3, 5]) == RED

    def test_patch_without_pixels(self, red_canvas):
        before = red_canvas.pixels.copy()
        _, snapshot = FrameCompositor().apply(red_canvas, PatchFrame(None, 1, 1))
        np.testing.assert_array_equal(snapshot.pixels, before)

    def test_patch_clipped_at_far_edge(self, red_canvas, make_patch):
        canvas, snapshot = FrameCompositor().apply(red_canvas, make_patch(3, 3, BLUE, x=5, y=3))
        assert tuple(snapshot.pixels[3, 5]) == BLUE
        assert (snapshot.pixels[:3, :, 0] == 255).all()
        assert canvas.pixels.shape == (4, 6, 4)

    def test_patch_clipped_at_negative_offset(self, make_patch):
        pixels = np.zeros((2, 2, 4), dtype=np.uint8)
        pixels[1, 1] = BLUE
        pixels[0, 0] = RED
        compositor = FrameCompositor()
        canvas = compositor.new_canvas(3, 3)
        _, snapshot = compositor.apply(canvas, PatchFrame(RasterFrame(pixels), -1, -1))
        assert tuple(snapshot.pixels[0, 0]) == BLUE
        assert (snapshot.pixels[1:, :] == 0).all()

    def test_patch_fully_outside(self, red_canvas, make_patch):
        before = red_canvas.pixels.copy()
        canvas, snapshot = FrameCompositor().apply(red_canvas, make_patch(2, 2, BLUE, x=10, y=10))
        np.testing.assert_array_equal(snapshot.pixels, before)
        np.testing.assert_array_equal(canvas.pixels, before)


class TestDisposal:
    """Tests for disposal policies."""

    def test_do_not_dispose(self, red_canvas, make_patch):
        patch = make_patch(2, 2, BLUE, x=1, y=1, disposal=DisposalMethod.DO_NOT_DISPOSE)
        canvas, snapshot = FrameCompositor().apply(red_canvas, patch)
        np.testing.assert_array_equal(canvas.pixels, snapshot.pixels)

    def test_unspecified_treated_as_do_not_dispose(self, make_patch):
        patch = make_patch(2, 2, BLUE, disposal=0)
        assert patch.disposal == DisposalMethod.DO_NOT_DISPOSE

    def test_reserved_tags_treated_as_do_not_dispose(self):
        assert DisposalMethod.from_tag(5) == DisposalMethod.DO_NOT_DISPOSE
        assert DisposalMethod.from_tag(None) == DisposalMethod.DO_NOT_DISPOSE

    def test_restore_to_background_clears_rectangle(self, red_canvas, make_patch):
        """Snapshot shows the patch; the canvas afterwards has it cleared."""
        before = red_canvas.pixels.copy()
        patch = make_patch(3, 2, BLUE, x=2, y=1, disposal=DisposalMethod.RESTORE_TO_BACKGROUND)
        canvas, snapshot = FrameCompositor().apply(red_canvas, patch)

        assert (snapshot.pixels[1:3, 2:5] == BLUE).all()
        assert (canvas.pixels[1:3, 2:5] == 0).all()

        outside = np.ones((4, 6), dtype=bool)
        outside[1:3, 2:5] = False
        np.testing.assert_array_equal(canvas.pixels[outside], before[outside])

    def test_restore_to_previous_clears_by_default(self, red_canvas, make_patch):
        patch = make_patch(2, 2, BLUE, x=0, y=0, disposal=DisposalMethod.RESTORE_TO_PREVIOUS)
        canvas, snapshot = FrameCompositor().apply(red_canvas, patch)
        assert (snapshot.pixels[:2, :2] == BLUE).all()
        assert (canvas.pixels[:2, :2] == 0).all()

    def test_restore_to_previous_restores_when_enabled(self, red_canvas, make_patch):
        patch = make_patch(2, 2, BLUE, x=0, y=0, disposal=DisposalMethod.RESTORE_TO_PREVIOUS)
        canvas, snapshot = FrameCompositor(restore_previous=True).apply(red_canvas, patch)
        assert (snapshot.pixels[:2, :2] == BLUE).all()
        assert (canvas.pixels == RED).all()

    def test_disposal_only_affects_following_frames(self, make_patch):
        compositor = FrameCompositor()
        canvas = compositor.new_canvas(4, 4)
        canvas, first = compositor.apply(
            canvas, make_patch(4, 4, RED, disposal=DisposalMethod.RESTORE_TO_BACKGROUND)
        )
        canvas, second = compositor.apply(canvas, make_patch(1, 1, BLUE))
        assert (first.pixels == RED).all()
        assert tuple(second.pixels[0, 0]) == BLUE
        assert (second.pixels[1:, :] == 0).all()


class TestClipRect:
    """Tests for clip_rect."""

    def test_inside(self):
        assert clip_rect(10, 10, 2, 3, 4, 5) == (
            (slice(3, 8), slice(2, 6)),
            (slice(0, 5), slice(0, 4)),
        )

    def test_outside(self):
        assert clip_rect(10, 10, 12, 0, 2, 2) is None
        assert clip_rect(10, 10, 0, 0, 0, 0) is None
