"""
Exception types raised by the viewer core.
"""

from typing import Optional


class BinviewError(Exception):
    """Base class for all viewer errors."""


class OutOfBoundsError(BinviewError, IndexError):
    """Raised when a byte offset lies outside the byte source."""

    def __init__(self, position: int, length: int) -> None:
        super().__init__(f"Position out of bounds: {position} (length {length})")
        self.position = position
        self.length = length


class ClipboardError(BinviewError):
    """Raised when a clipboard backend or the terminal channel fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidHexError(ClipboardError, ValueError):
    """Raised when text cannot be parsed as hexadecimal bytes."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid hex string: {text}")
        self.text = text
