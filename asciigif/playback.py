"""Playback clock for character grid animations.

The clock advances a frame index at a fixed rate on a background timer.
Starting returns a :class:`ClockHandle`; once the handle is cancelled (or the
clock is stopped) the timer never touches the index again. Loading a new
sequence cancels the timer and resets the index in one step, so a stale tick
can never index past the end of a shorter sequence.

Example:
    from asciigif.playback import PlaybackClock

    clock = PlaybackClock(sequence, fps=12)
    clock.on_frame(lambda index: redraw(sequence[index]))
    handle = clock.start()
    ...
    handle.cancel()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .luminance import round_half_up
from .resampler import CharacterGrid
from .sequence import AnimationSequence

logger = logging.getLogger(__name__)

DEFAULT_FPS = 12.0


class PlaybackState(Enum):
    """Playback state machine."""

    STOPPED = "stopped"
    PLAYING = "playing"


@dataclass
class PlaybackStatus:
    """Snapshot of the clock for status line rendering."""

    index: int = 0
    length: int = 0
    fps: float = DEFAULT_FPS
    playback_state: PlaybackState = PlaybackState.STOPPED

    def describe(self) -> str:
        """Human readable position, e.g. ``3 / 10``."""
        if self.length == 0:
            return "no animation"
        return f"{self.index + 1} / {self.length}"


def frame_period_ms(fps: float) -> int:
    """Timer period for a target frame rate, at least 1 ms."""
    if fps <= 0:
        return 1
    return max(1, round_half_up(1000 / fps))


class ClockHandle:
    """Handle of one running timer of a :class:`PlaybackClock`."""

    def __init__(self, clock: PlaybackClock, generation: int, stop_event: threading.Event):
        self._clock = clock
        self._generation = generation
        self._stop_event = stop_event

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def active(self) -> bool:
        """Whether the timer behind this handle may still advance the index."""
        return not self._stop_event.is_set()

    def cancel(self) -> None:
        """Stop the timer. No index change happens after this returns."""
        self._clock._cancel(self._generation)


class PlaybackClock:
    """Advance a frame index over an AnimationSequence at a fixed rate.

    Index changes from the timer, seeks, stop and load are serialized by one
    lock.
    """

    def __init__(
        self,
        sequence: AnimationSequence | None = None,
        fps: float = DEFAULT_FPS,
    ):
        """
        :param sequence: Sequence to play (empty if None)
        :param fps: Target frames per second
        """
        self._lock = threading.RLock()
        self._sequence = sequence if sequence is not None else AnimationSequence()
        self._fps = fps
        self._index = 0
        self._state = PlaybackState.STOPPED

        # Timer
        self._generation = 0
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._handle: ClockHandle | None = None

        # Callbacks
        self._on_frame: list[Callable[[int], None]] = []
        self._on_state_change: list[Callable[[PlaybackState], None]] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def sequence(self) -> AnimationSequence:
        return self._sequence

    @property
    def index(self) -> int:
        """Current frame index."""
        return self._index

    @property
    def length(self) -> int:
        return len(self._sequence)

    @property
    def fps(self) -> float:
        return self._fps

    @property
    def period_ms(self) -> int:
        """Timer period in milliseconds."""
        return frame_period_ms(self._fps)

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def current_frame(self) -> CharacterGrid | None:
        """Grid at the current index, None for an empty sequence."""
        with self._lock:
            if not self._sequence:
                return None
            return self._sequence[self._index]

    def get_status(self) -> PlaybackStatus:
        with self._lock:
            return PlaybackStatus(
                index=self._index,
                length=len(self._sequence),
                fps=self._fps,
                playback_state=self._state,
            )

    # -------------------------------------------------------------------------
    # Playback Control
    # -------------------------------------------------------------------------

    def start(self) -> ClockHandle | None:
        """
        Start advancing the index.

        :return: Handle of the running timer, None if there is nothing to play
        """
        with self._lock:
            if not self._sequence:
                logger.debug("Empty sequence, playback not started")
                return None
            if self._handle is not None and self._handle.active:
                return self._handle
            self._generation += 1
            self._stop_event = threading.Event()
            self._handle = ClockHandle(self, self._generation, self._stop_event)
            self._thread = threading.Thread(
                target=self._run,
                args=(self._generation, self._stop_event, self.period_ms / 1000.0),
                name="playback_clock",
                daemon=True,
            )
            self._thread.start()
            self._set_state(PlaybackState.PLAYING)
            return self._handle

    def stop(self) -> None:
        """Halt advancement, keeping the current index."""
        with self._lock:
            self._cancel(self._generation)

    def toggle(self) -> None:
        """Toggle between running and stopped."""
        if self.is_running:
            self.stop()
        else:
            self.start()

    def set_fps(self, fps: float) -> None:
        """Change the target frame rate, restarting a running timer."""
        with self._lock:
            self._fps = fps
            if self.is_running:
                self.stop()
                self.start()

    def load(self, sequence: AnimationSequence) -> None:
        """Replace the sequence, stopping playback and resetting the index."""
        with self._lock:
            self._cancel(self._generation)
            self._sequence = sequence
            self._index = 0
        self._notify_frame(0)

    # -------------------------------------------------------------------------
    # Seeking
    # -------------------------------------------------------------------------

    def step_forward(self) -> None:
        """Move to the next frame, wrapping around."""
        self._move(1)

    def step_backward(self) -> None:
        """Move to the previous frame, wrapping around."""
        self._move(-1)

    def seek_to(self, index: int) -> None:
        """Jump to an absolute frame index (taken modulo the length)."""
        with self._lock:
            if not self._sequence:
                return
            self._index = index % len(self._sequence)
            new_index = self._index
        self._notify_frame(new_index)

    def tick(self) -> None:
        """Advance by one frame, as the timer does once per period."""
        self._move(1)

    # -------------------------------------------------------------------------
    # Callbacks
    # -------------------------------------------------------------------------

    def on_frame(self, callback: Callable[[int], None]) -> None:
        """Register a callback receiving the new index on every change."""
        self._on_frame.append(callback)

    def on_state_change(self, callback: Callable[[PlaybackState], None]) -> None:
        """Register a callback for state changes."""
        self._on_state_change.append(callback)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _move(self, delta: int) -> None:
        with self._lock:
            if not self._sequence:
                return
            self._index = (self._index + delta) % len(self._sequence)
            new_index = self._index
        self._notify_frame(new_index)

    def _run(self, generation: int, stop_event: threading.Event, period: float) -> None:
        while not stop_event.wait(period):
            with self._lock:
                if generation != self._generation or stop_event.is_set():
                    return
                if not self._sequence:
                    return
                self._index = (self._index + 1) % len(self._sequence)
                # Notified under the lock so no callback follows a cancel
                self._notify_frame(self._index)

    def _cancel(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._stop_event is None:
                return
            if self._stop_event.is_set():
                return
            self._stop_event.set()
            # Invalidate ticks already waiting for the lock
            self._generation += 1
            self._handle = None
            self._thread = None
            self._set_state(PlaybackState.STOPPED)

    def _notify_frame(self, index: int) -> None:
        for callback in self._on_frame:
            callback(index)

    def _set_state(self, state: PlaybackState) -> None:
        """Set state and notify callbacks."""
        old_state = self._state
        self._state = state
        if old_state != state:
            for callback in self._on_state_change:
                callback(state)


__all__ = [
    "DEFAULT_FPS",
    "ClockHandle",
    "PlaybackClock",
    "PlaybackState",
    "PlaybackStatus",
    "frame_period_ms",
]
