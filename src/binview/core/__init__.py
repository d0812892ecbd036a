"""
Core package for byte access and decode-for-display support.

This package implements the viewer core: the read-only ByteSource, the
CharEncoding table with its conversion primitives, and decode_for_display,
which splits a byte buffer into displayable units for the text preview.
"""

from .decode import DecodedUnit, decode_for_display, decode_text, decode_window, iter_units, sync_offset
from .encoding import CharEncoding
from .errors import BinviewError, ClipboardError, InvalidHexError, OutOfBoundsError
from .source import ByteSource

__all__ = [
    'ByteSource',
    'CharEncoding',
    'DecodedUnit',
    'decode_for_display',
    'decode_text',
    'decode_window',
    'iter_units',
    'sync_offset',
    'BinviewError',
    'ClipboardError',
    'InvalidHexError',
    'OutOfBoundsError',
]
