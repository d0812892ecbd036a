"""
Utility package for hex text conversion and clipboard support.
"""

from .hex_utils import (
    HexFormat,
    bytes_to_hex,
    hex_to_bytes,
    strip_hex_delimiters,
    filter_hex_digits,
    format_offset
)
from .clipboard import (
    build_osc52_sequence,
    frame_for_terminal,
    copy_to_terminal,
    copy_hex_to_all,
    copy_text_to_all,
    paste_hex
)

__all__ = [
    'HexFormat',
    'bytes_to_hex',
    'hex_to_bytes',
    'strip_hex_delimiters',
    'filter_hex_digits',
    'format_offset',
    'build_osc52_sequence',
    'frame_for_terminal',
    'copy_to_terminal',
    'copy_hex_to_all',
    'copy_text_to_all',
    'paste_hex'
]
