# AsciiGif - AnimationSequence
"""
AnimationSequence class holding the character grids of a converted animation.

The exported form of a sequence is a JSON list of frames, each frame a list
of equal-length row strings. Reading an export back reproduces the grids
character for character.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from .exceptions import SequenceFormatError
from .luminance import BLANK
from .resampler import CharacterGrid


@dataclass
class AnimationSequence:
    """Ordered character grids of one animation, in temporal order.

    All grids share the same row count and row width.

    :ivar frames: One CharacterGrid per source frame
    :ivar delays_ms: Optional per-frame display durations (not exported)
    """

    frames: list[CharacterGrid] = field(default_factory=list)
    delays_ms: list[int | None] = field(default_factory=list)

    def __post_init__(self):
        frames, delays = list(self.frames), list(self.delays_ms)
        delays += [None] * (len(frames) - len(delays))
        self.frames, self.delays_ms = [], []
        for grid, delay_ms in zip(frames, delays):
            self.append(grid, delay_ms)

    def __len__(self) -> int:
        return len(self.frames)

    def __bool__(self) -> bool:
        return len(self.frames) > 0

    def __iter__(self) -> Iterator[CharacterGrid]:
        return iter(self.frames)

    def __getitem__(self, index: int) -> CharacterGrid:
        return self.frames[index]

    @property
    def width(self) -> int:
        """Row width in characters (0 for an empty sequence)."""
        if not self.frames or not self.frames[0]:
            return 0
        return len(self.frames[0][0])

    @property
    def height(self) -> int:
        """Row count per frame (0 for an empty sequence)."""
        return len(self.frames[0]) if self.frames else 0

    def append(self, grid: CharacterGrid, delay_ms: int | None = None) -> None:
        """Add a frame at the end of the sequence."""
        grid = tuple(grid)
        if len({len(row) for row in grid}) > 1:
            raise ValueError("Frame rows differ in width")
        if self.frames and _grid_shape(grid) != (self.width, self.height):
            raise ValueError(
                f"Frame of {_grid_shape(grid)} does not match sequence "
                f"dimensions {(self.width, self.height)}"
            )
        self.frames.append(grid)
        self.delays_ms.append(delay_ms)

    def replace_frame(self, index: int, text: str) -> CharacterGrid:
        """
        Overwrite a single frame with edited text.

        Rows are padded with blanks or truncated so the frame keeps the
        sequence's width and height.

        :param index: Frame to replace
        :param text: New frame content, rows separated by newlines
        :return: The stored grid
        """
        if not 0 <= index < len(self.frames):
            raise IndexError(f"Frame index {index} out of range (0-{len(self.frames) - 1})")
        width, height = self.width, self.height
        rows = text.split("\n")[:height]
        rows += [""] * (height - len(rows))
        grid = tuple(row[:width].ljust(width, BLANK) for row in rows)
        self.frames[index] = grid
        return grid

    def to_list(self) -> list[list[str]]:
        """Exported grid format: list of frames, each a list of rows."""
        return [list(grid) for grid in self.frames]

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_list(), indent=indent, ensure_ascii=False)

    def save(self, path: str | Path) -> Path:
        """Write the exported grid format as JSON (UTF-8)."""
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        return path

    @classmethod
    def from_list(cls, data: Any) -> AnimationSequence:
        """
        Parse the exported grid format.

        :param data: List of frames, each a list of equal-length strings
        :return: The sequence
        """
        if not isinstance(data, list):
            raise SequenceFormatError("Animation must be a list of frames.")
        sequence = cls()
        for i, frame in enumerate(data):
            if not isinstance(frame, list):
                raise SequenceFormatError(f"Frame #{i} is not a list of rows.")
            for row in frame:
                if not isinstance(row, str):
                    raise SequenceFormatError(f"Frame #{i} contains a non-string row.")
            widths = {len(row) for row in frame}
            if len(widths) > 1:
                raise SequenceFormatError(f"Frame #{i} has rows of differing width.")
            try:
                sequence.append(tuple(frame))
            except ValueError as e:
                raise SequenceFormatError(f"Frame #{i}: {e}") from e
        return sequence

    @classmethod
    def from_json(cls, text: str) -> AnimationSequence:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SequenceFormatError(f"Invalid JSON: {e}") from e
        return cls.from_list(data)

    @classmethod
    def load(cls, path: str | Path) -> AnimationSequence:
        """Read a sequence written by :meth:`save`."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_json(f.read())


def _grid_shape(grid: CharacterGrid) -> tuple[int, int]:
    return (len(grid[0]) if grid else 0), len(grid)


__all__ = ['AnimationSequence']
