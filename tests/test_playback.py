"""Tests for the playback clock."""

import threading
import time

import pytest

from asciigif import AnimationSequence, PlaybackClock, PlaybackState
from asciigif.playback import frame_period_ms


@pytest.fixture
def sequence():
    """Three one-row frames."""
    return AnimationSequence([("a",), ("b",), ("c",)])


@pytest.fixture
def clock(sequence):
    clock = PlaybackClock(sequence, fps=12)
    yield clock
    clock.stop()


class TestFramePeriod:
    """Tests for fps to timer period conversion."""

    def test_default_fps(self):
        assert frame_period_ms(12) == 83

    def test_rounding(self):
        assert frame_period_ms(8) == 125
        assert frame_period_ms(16) == 63

    @pytest.mark.parametrize("fps", [0, -4, 5000])
    def test_period_at_least_one_ms(self, fps):
        assert frame_period_ms(fps) == 1


class TestManualControl:
    """Tests for seeking and stepping without the timer."""

    def test_initial_state(self, clock):
        assert clock.index == 0
        assert clock.length == 3
        assert clock.state == PlaybackState.STOPPED
        assert clock.current_frame == ("a",)

    def test_step_forward_wraps(self, clock):
        for _ in range(3):
            clock.step_forward()
        assert clock.index == 0

    def test_step_backward_wraps(self, clock):
        clock.step_backward()
        assert clock.index == 2
        assert clock.current_frame == ("c",)

    def test_seek_to(self, clock):
        clock.seek_to(5)
        assert clock.index == 2

    def test_tick_advances(self, clock):
        clock.tick()
        assert clock.index == 1

    def test_on_frame_callback(self, clock):
        seen = []
        clock.on_frame(seen.append)
        clock.step_forward()
        clock.step_backward()
        assert seen == [1, 0]

    def test_status(self, clock):
        clock.step_forward()
        status = clock.get_status()
        assert status.describe() == "2 / 3"
        assert status.playback_state == PlaybackState.STOPPED


class TestEmptySequence:
    """An empty sequence means no animation is available."""

    def test_start_returns_none(self):
        clock = PlaybackClock()
        assert clock.start() is None
        assert not clock.is_running

    def test_seeks_are_noops(self):
        clock = PlaybackClock(AnimationSequence())
        clock.step_forward()
        clock.step_backward()
        clock.seek_to(3)
        assert clock.index == 0
        assert clock.current_frame is None
        assert clock.get_status().describe() == "no animation"


class TestTimer:
    """Tests for the background timer."""

    def test_advances_while_running(self, sequence):
        clock = PlaybackClock(sequence, fps=200)
        ticked = threading.Event()
        clock.on_frame(lambda _index: ticked.set())
        handle = clock.start()
        try:
            assert handle is not None
            assert clock.is_running
            assert ticked.wait(2.0)
        finally:
            clock.stop()

    def test_stop_keeps_index_and_halts(self, sequence):
        clock = PlaybackClock(sequence, fps=200)
        clock.start()
        time.sleep(0.05)
        clock.stop()
        index = clock.index
        seen = []
        clock.on_frame(seen.append)
        time.sleep(0.05)
        assert clock.index == index
        assert seen == []
        assert clock.state == PlaybackState.STOPPED

    def test_handle_cancel(self, sequence):
        clock = PlaybackClock(sequence, fps=200)
        handle = clock.start()
        handle.cancel()
        assert not handle.active
        assert not clock.is_running
        index = clock.index
        time.sleep(0.05)
        assert clock.index == index

    def test_start_twice_returns_same_handle(self, clock):
        first = clock.start()
        assert clock.start() is first

    def test_stale_handle_does_not_stop_new_timer(self, clock):
        old = clock.start()
        clock.stop()
        new = clock.start()
        old.cancel()
        assert clock.is_running
        assert new.active
        assert new.generation != old.generation

    def test_seek_while_running(self, sequence):
        clock = PlaybackClock(sequence, fps=1)
        clock.start()
        try:
            clock.step_backward()
            assert clock.index == 2
        finally:
            clock.stop()

    def test_set_fps_restarts(self, clock):
        clock.start()
        clock.set_fps(25)
        assert clock.is_running
        assert clock.period_ms == 40

    def test_state_callbacks(self, clock):
        states = []
        clock.on_state_change(states.append)
        clock.toggle()
        clock.toggle()
        assert states == [PlaybackState.PLAYING, PlaybackState.STOPPED]


class TestLoad:
    """Replacing the sequence resets playback."""

    def test_load_resets_and_stops(self, clock):
        clock.start()
        clock.seek_to(2)
        shorter = AnimationSequence([("x",)])
        clock.load(shorter)
        assert clock.index == 0
        assert not clock.is_running
        assert clock.sequence is shorter
        assert clock.current_frame == ("x",)

    def test_no_tick_after_load(self, sequence):
        clock = PlaybackClock(sequence, fps=500)
        clock.start()
        time.sleep(0.02)
        clock.load(AnimationSequence([("x",), ("y",)]))
        time.sleep(0.05)
        assert clock.index == 0
