"""
Command line interface.

Usage:
    # Convert a GIF to an exported JSON sequence
    asciigif convert animation.gif -o animation.json --width 100

    # Play a GIF or an exported sequence in the terminal
    asciigif play animation.gif --fps 15
    asciigif play animation.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .assembler import convert_gif
from .config import settings
from .exceptions import AsciiGifError
from .sequence import AnimationSequence

logger = logging.getLogger(__name__)


def _load_sequence(path: Path, args: argparse.Namespace) -> AnimationSequence:
    """Load an exported sequence or convert a GIF, depending on the suffix."""
    if path.suffix.lower() == ".json":
        return AnimationSequence.load(path)
    return convert_gif(
        path,
        output_width=args.width,
        alpha_threshold=args.alpha_threshold,
        restore_previous=args.restore_previous,
    )


def cmd_convert(args: argparse.Namespace) -> int:
    sequence = convert_gif(
        args.input,
        output_width=args.width,
        alpha_threshold=args.alpha_threshold,
        restore_previous=args.restore_previous,
    )
    output = args.output or args.input.with_suffix(".json")
    sequence.save(output)
    print(
        f"Wrote {len(sequence)} frames ({sequence.width}x{sequence.height}) to {output}"
    )
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    from .terminal_player import TerminalPlayer

    sequence = _load_sequence(args.input, args)
    if not sequence:
        print("No frames to play.", file=sys.stderr)
        return 1
    TerminalPlayer(sequence, fps=args.fps).play()
    return 0


def _add_conversion_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--width",
        "-w",
        type=int,
        default=settings.OUTPUT_WIDTH,
        help=f"Output width in characters (default: {settings.OUTPUT_WIDTH})",
    )
    parser.add_argument(
        "--alpha-threshold",
        type=int,
        default=settings.ALPHA_THRESHOLD,
        help=f"Alpha below which pixels render blank, 0-255 (default: {settings.ALPHA_THRESHOLD})",
    )
    parser.add_argument(
        "--restore-previous",
        action="store_true",
        default=settings.RESTORE_PREVIOUS,
        help="Restore the prior contents for 'restore to previous' frames "
        "instead of clearing them",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asciigif",
        description="Convert animated GIFs into ASCII character animations",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert a GIF to JSON")
    convert_parser.add_argument("input", type=Path, help="GIF file")
    convert_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output JSON file (default: input with .json suffix)",
    )
    _add_conversion_arguments(convert_parser)
    convert_parser.set_defaults(func=cmd_convert)

    play_parser = subparsers.add_parser("play", help="Play a GIF or JSON sequence")
    play_parser.add_argument("input", type=Path, help="GIF or exported JSON file")
    play_parser.add_argument(
        "--fps",
        type=float,
        default=settings.FPS,
        help=f"Frames per second (default: {settings.FPS:g})",
    )
    _add_conversion_arguments(play_parser)
    play_parser.set_defaults(func=cmd_play)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (AsciiGifError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
