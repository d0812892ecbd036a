"""
Utility functions for converting between bytes and hex text.
"""

import string
from enum import Enum
from typing import Final

from ..core.errors import InvalidHexError

HEX_DIGITS: Final[str] = string.hexdigits
HEX_DELIMITERS: Final[tuple] = (',', '0x', '0X', '{', '}')


class HexFormat(Enum):
    """Textual layouts for copied bytes."""

    SPACED = "spaced"          # 48 65 6C 6C 6F
    CONTINUOUS = "continuous"  # 48656C6C6F
    C_ARRAY = "c_array"        # { 0x48, 0x65, 0x6C, 0x6C, 0x6F }

    def next(self) -> 'HexFormat':
        members = list(HexFormat)
        return members[(members.index(self) + 1) % len(members)]


def bytes_to_hex(data: bytes, fmt: HexFormat = HexFormat.SPACED) -> str:
    """
    Format bytes as uppercase hex text.

    Args:
        data (bytes): Bytes to format
        fmt (HexFormat): Output layout

    Returns:
        str: Formatted hex string
    """

    if fmt is HexFormat.CONTINUOUS:
        return ''.join(f"{b:02X}" for b in data)

    if fmt is HexFormat.C_ARRAY:
        inner = ', '.join(f"0x{b:02X}" for b in data)
        return f"{{ {inner} }}"

    return ' '.join(f"{b:02X}" for b in data)


def strip_hex_delimiters(text: str) -> str:
    """Remove whitespace, commas, braces and 0x prefixes."""

    cleaned = ''.join(text.split())
    for delimiter in HEX_DELIMITERS:
        cleaned = cleaned.replace(delimiter, '')

    return cleaned


def filter_hex_digits(text: str) -> str:
    """Drop every character that is not an ASCII hex digit.

    Parsing is permissive on purpose: stray characters in pasted text are
    discarded rather than rejected.
    """

    return ''.join(c for c in text if c in HEX_DIGITS)


def hex_to_bytes(text: str) -> bytes:
    """
    Parse hex text in any of the HexFormat layouts into bytes.

    Args:
        text (str): Hex text, e.g. "FF 00 A5" or "{ 0xFF, 0x00 }"

    Returns:
        bytes: Parsed bytes

    Raises:
        InvalidHexError: If the cleaned digit count is odd or a pair is invalid
    """

    digits = filter_hex_digits(strip_hex_delimiters(text))

    if len(digits) % 2 != 0:
        raise InvalidHexError("Hex string must have even length")

    result = bytearray()
    for i in range(0, len(digits), 2):
        pair = digits[i:i + 2]
        try:
            result.append(int(pair, 16))
        except ValueError:
            raise InvalidHexError(pair) from None

    return bytes(result)


def format_offset(offset: int, radix: int = 16) -> str:
    """
    Format a byte offset for the address column.

    Args:
        offset (int): Byte offset to format
        radix (int): 16 for 8 uppercase hex digits, 10 for 10 decimal digits

    Returns:
        str: Zero-padded offset
    """

    if radix == 16:
        return f"{offset:08X}"

    return f"{offset:010d}"
