"""
Terminal Player - Play character grid animations in the terminal.

Frames come from an :class:`AnimationSequence`; the :class:`PlaybackClock`
decides which frame is current and the player redraws whenever the index
changes.

Example:
    from asciigif import AnimationSequence
    from asciigif.terminal_player import TerminalPlayer

    sequence = AnimationSequence.load("animation.json")
    TerminalPlayer(sequence, fps=12).play()

Controls:
    Space       - Play/Stop toggle
    Left/Right  - Previous/next frame
    +/-         - Frame rate up/down
    Q / Escape  - Exit
"""

from __future__ import annotations

import sys
import threading
from typing import Callable

from blessed import Terminal

from .playback import DEFAULT_FPS, PlaybackClock, PlaybackState, PlaybackStatus
from .sequence import AnimationSequence

# ANSI escape codes
ESC = "\033"
CLEAR_SCREEN = f"{ESC}[2J"
CURSOR_HOME = f"{ESC}[H"
CLEAR_LINE = f"{ESC}[K"

FPS_STEP = 1.0
MIN_FPS = 1.0
MAX_FPS = 60.0


class KeyboardHandler:
    """Handle keyboard input using blessed library."""

    def __init__(self, terminal: Terminal):
        self.terminal = terminal
        self._bindings: dict[str, Callable[[], None]] = {}
        self._char_bindings: dict[str, Callable[[], None]] = {}

    def bind(self, key: str, handler: Callable[[], None]) -> None:
        """Bind a handler to a key.

        Key can be a key name (e.g., 'KEY_LEFT', 'KEY_ESCAPE') or a character.
        """
        if key.startswith("KEY_"):
            self._bindings[key] = handler
        else:
            self._char_bindings[key] = handler

    def process(self, timeout: float = 0.01) -> bool:
        """Process one key press, if any.

        Returns True if a bound handler was called.
        """
        key = self.terminal.inkey(timeout=timeout)
        if not key:
            return False

        # Named keys (arrows, escape, etc.)
        if key.name and key.name in self._bindings:
            self._bindings[key.name]()
            return True

        char = str(key)
        if char in self._char_bindings:
            self._char_bindings[char]()
            return True
        return False


def render_status_line(status: PlaybackStatus, width: int) -> str:
    """Status line below the frame, e.g. ``▶ 3 / 10  12 fps``."""
    icon = "▶" if status.playback_state == PlaybackState.PLAYING else "■"
    text = f" {icon} {status.describe()}  {status.fps:g} fps  [space] play/stop  [q] quit"
    return text[:width].ljust(width)


class TerminalPlayer:
    """Interactive terminal player for an AnimationSequence."""

    def __init__(
        self,
        sequence: AnimationSequence,
        *,
        fps: float = DEFAULT_FPS,
        autoplay: bool = True,
        terminal: Terminal | None = None,
    ):
        """
        :param sequence: Animation to play
        :param fps: Initial frames per second
        :param autoplay: Start the clock immediately
        :param terminal: blessed Terminal (created in play() if None)
        """
        self.sequence = sequence
        self.autoplay = autoplay
        self.clock = PlaybackClock(sequence, fps=fps)
        self._terminal = terminal
        self._keyboard: KeyboardHandler | None = None
        self._running = False
        self._dirty = threading.Event()
        self._dirty.set()

        self.clock.on_frame(self._on_frame)
        self.clock.on_state_change(self._on_state_change)

    # -------------------------------------------------------------------------
    # Key handlers
    # -------------------------------------------------------------------------

    def _setup_keyboard_bindings(self) -> None:
        kb = self._keyboard
        if not kb:
            return
        kb.bind(" ", self._on_toggle)
        kb.bind("q", self._on_quit)
        kb.bind("Q", self._on_quit)
        kb.bind("KEY_ESCAPE", self._on_quit)
        kb.bind("KEY_LEFT", self.clock.step_backward)
        kb.bind("KEY_RIGHT", self.clock.step_forward)
        kb.bind("+", self._on_faster)
        kb.bind("=", self._on_faster)  # Same key without shift
        kb.bind("-", self._on_slower)
        kb.bind("_", self._on_slower)

    def _on_toggle(self) -> None:
        self.clock.toggle()

    def _on_quit(self) -> None:
        self._running = False

    def _on_faster(self) -> None:
        self.clock.set_fps(min(MAX_FPS, self.clock.fps + FPS_STEP))
        self._dirty.set()

    def _on_slower(self) -> None:
        self.clock.set_fps(max(MIN_FPS, self.clock.fps - FPS_STEP))
        self._dirty.set()

    def _on_frame(self, _index: int) -> None:
        self._dirty.set()

    def _on_state_change(self, _state: PlaybackState) -> None:
        self._dirty.set()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self, width: int) -> str:
        """Build the output for the current frame and status line."""
        output = [CURSOR_HOME]
        grid = self.clock.current_frame
        if grid is None:
            output.append(f"No frames.{CLEAR_LINE}\n")
        else:
            for row in grid:
                output.append(f"{row}{CLEAR_LINE}\n")
        output.append(render_status_line(self.clock.get_status(), width))
        return "".join(output)

    def play(self) -> None:
        """Run the player until the user quits."""
        if self._terminal is None:
            self._terminal = Terminal()
        term = self._terminal
        self._keyboard = KeyboardHandler(term)
        self._setup_keyboard_bindings()
        self._running = True

        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            sys.stdout.write(CLEAR_SCREEN)
            if self.autoplay:
                self.clock.start()
            try:
                while self._running:
                    self._keyboard.process(timeout=0.01)
                    if self._dirty.is_set():
                        self._dirty.clear()
                        sys.stdout.write(self.render(term.width or 80))
                        sys.stdout.flush()
            except KeyboardInterrupt:
                pass
            finally:
                self.clock.stop()
                self._running = False


__all__ = ["KeyboardHandler", "TerminalPlayer", "render_status_line"]
