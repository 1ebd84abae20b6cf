"""Exception classes for AsciiGif."""


class AsciiGifError(Exception):
    """Base exception for AsciiGif errors."""

    pass


class DecodeError(AsciiGifError):
    """Raised when a source animation can not be decoded."""

    pass


class SequenceFormatError(AsciiGifError, ValueError):
    """Raised when an exported animation sequence is malformed."""

    pass
