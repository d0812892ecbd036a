"""
Decode raw bytes into displayable units for the text preview.

Every byte offset of the input belongs to exactly one DecodedUnit span. The
unit is stored at the first offset of its span; the remaining offsets of a
multi-byte unit hold None. Invalid bytes become one-byte '.' placeholders, so
decoding never fails for arbitrary binary input.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Iterator, List, Optional, Tuple

from .encoding import (
    PLACEHOLDER,
    CharEncoding,
    encode_char,
    grapheme_width,
    graphemes,
    is_displayable,
    is_printable_byte,
)

if TYPE_CHECKING:
    from .source import ByteSource

MAX_TRIAL_LENGTH = 4

# cp932 maps these lone bytes to vendor private-use characters (U+F8F0-U+F8F3);
# Shift_JIS proper has no character for them
_REJECTED_LEAD_BYTES: Dict[CharEncoding, FrozenSet[int]] = {
    CharEncoding.SHIFT_JIS: frozenset({0xA0, 0xFD, 0xFE, 0xFF}),
}


@dataclass(frozen=True)
class DecodedUnit:
    """One displayable piece decoded from one or more consecutive bytes."""

    display: str
    byte_len: int
    width: int


DecodeMap = List[Optional[DecodedUnit]]

INVALID_UNIT = DecodedUnit(PLACEHOLDER, 1, 1)


def _display_unit(text: str, byte_len: int) -> DecodedUnit:
    """Build a unit for decoded text, substituting '.' for undisplayable text."""

    if not is_displayable(text):
        return DecodedUnit(PLACEHOLDER, byte_len, 1)

    width = min(max(grapheme_width(text), 1), 2)
    return DecodedUnit(text, byte_len, width)


def utf8_char_len(first_byte: int) -> int:
    """Get the sequence length announced by a UTF-8 leading byte, 0 if invalid."""

    if first_byte <= 0x7F:
        return 1
    if 0xC0 <= first_byte <= 0xDF:
        return 2
    if 0xE0 <= first_byte <= 0xEF:
        return 3
    if 0xF0 <= first_byte <= 0xF7:
        return 4

    return 0


def _decode_utf8(data: bytes, result: DecodeMap) -> None:
    i = 0
    while i < len(data):
        char_len = utf8_char_len(data[i])

        if char_len == 0 or i + char_len > len(data):
            result[i] = INVALID_UNIT
            i += 1
            continue

        try:
            text = data[i:i + char_len].decode('utf-8')
        except UnicodeDecodeError:
            result[i] = INVALID_UNIT
            i += 1
            continue

        result[i] = _display_unit(graphemes(text)[0], char_len)
        i += char_len


def _decode_utf16(data: bytes, result: DecodeMap, byteorder: str) -> None:
    i = 0
    while i + 1 < len(data):
        code_unit = int.from_bytes(data[i:i + 2], byteorder)

        if 0xD800 <= code_unit <= 0xDBFF and i + 3 < len(data):
            low = int.from_bytes(data[i + 2:i + 4], byteorder)
            if 0xDC00 <= low <= 0xDFFF:
                code_point = 0x10000 + (((code_unit - 0xD800) << 10) | (low - 0xDC00))
                result[i] = _display_unit(chr(code_point), 4)
                i += 4
                continue

        # Unpaired surrogates are not characters
        if 0xD800 <= code_unit <= 0xDFFF:
            result[i] = DecodedUnit(PLACEHOLDER, 2, 1)
        else:
            result[i] = _display_unit(chr(code_unit), 2)
        i += 2

    if i < len(data):
        result[i] = INVALID_UNIT


def _decode_trial(data: bytes, result: DecodeMap, encoding: CharEncoding) -> None:
    """
    Decode a multi-byte encoding that cannot be synchronised from a lead byte.

    Candidate lengths are tried shortest first; a length is accepted only when
    the first decoded grapheme re-encodes to exactly that many bytes.
    """

    rejected = _REJECTED_LEAD_BYTES.get(encoding, frozenset())

    i = 0
    while i < len(data):
        if data[i] in rejected:
            result[i] = INVALID_UNIT
            i += 1
            continue

        unit = None
        for length in range(1, min(MAX_TRIAL_LENGTH, len(data) - i) + 1):
            try:
                text = data[i:i + length].decode(encoding.codec)
            except UnicodeDecodeError:
                continue

            if not text:
                continue

            first = graphemes(text)[0]
            encoded = encode_char(first, encoding)
            if encoded is not None and len(encoded) == length:
                unit = _display_unit(first, length)
                break

        if unit is None:
            result[i] = INVALID_UNIT
            i += 1
            continue

        result[i] = unit
        i += unit.byte_len


def _decode_single_byte(data: bytes, result: DecodeMap, latin: bool) -> None:
    for i, byte in enumerate(data):
        if is_printable_byte(byte):
            display = chr(byte)
        elif latin and byte >= 0x80 and is_displayable(chr(byte)):
            display = chr(byte)
        else:
            display = PLACEHOLDER

        result[i] = DecodedUnit(display, 1, 1)


_DECODERS: Dict[CharEncoding, Callable[[bytes, DecodeMap], None]] = {
    CharEncoding.UTF8: _decode_utf8,
    CharEncoding.UTF16LE: lambda data, result: _decode_utf16(data, result, 'little'),
    CharEncoding.UTF16BE: lambda data, result: _decode_utf16(data, result, 'big'),
    CharEncoding.SHIFT_JIS: lambda data, result: _decode_trial(data, result, CharEncoding.SHIFT_JIS),
    CharEncoding.EUC_JP: lambda data, result: _decode_trial(data, result, CharEncoding.EUC_JP),
    CharEncoding.ISO2022JP: lambda data, result: _decode_single_byte(data, result, latin=True),
    CharEncoding.ASCII: lambda data, result: _decode_single_byte(data, result, latin=False),
    CharEncoding.LATIN1: lambda data, result: _decode_single_byte(data, result, latin=True),
}


def decode_for_display(data: bytes, encoding: CharEncoding) -> DecodeMap:
    """
    Decode a byte slice into a per-offset map of displayable units.

    Args:
        data (bytes): Bytes to decode
        encoding (CharEncoding): Encoding to decode with

    Returns:
        list: One slot per input byte, a DecodedUnit at the first offset of
        each span and None elsewhere
    """

    data = bytes(data)
    if not data:
        return []

    result: DecodeMap = [None] * len(data)
    _DECODERS[encoding](data, result)

    return result


def iter_units(decode_map: DecodeMap) -> Iterator[Tuple[int, DecodedUnit]]:
    """Yield (offset, unit) pairs in ascending offset order."""

    for offset, unit in enumerate(decode_map):
        if unit is not None:
            yield offset, unit


def decode_text(decode_map: DecodeMap) -> str:
    """Join the display strings of a decode map."""

    return ''.join(unit.display for _, unit in iter_units(decode_map))


SYNC_CHUNK = 4096

# Bytes below these values never occur inside a multi-byte unit, so they
# always start one
_SYNC_BYTE_LIMITS: Dict[CharEncoding, int] = {
    CharEncoding.SHIFT_JIS: 0x40,
    CharEncoding.EUC_JP: 0x80,
}


def _find_sync_byte(source: 'ByteSource', start: int, limit: int) -> int:
    pos = start
    while pos > 0:
        chunk_start = max(0, pos - SYNC_CHUNK)
        chunk = source.read(chunk_start, pos - chunk_start + 1)
        for index in range(len(chunk) - 1, -1, -1):
            if chunk[index] < limit:
                return chunk_start + index
        pos = chunk_start - 1

    return 0


def sync_offset(source: 'ByteSource', start: int, encoding: CharEncoding) -> int:
    """
    Find where to start decoding so units at or after start match a decode from offset 0.

    Args:
        source (ByteSource): Source being displayed
        start (int): First offset that will be shown
        encoding (CharEncoding): Encoding to decode with

    Returns:
        int: Offset at or before start
    """

    if start <= 0:
        return 0

    if encoding in (CharEncoding.UTF16LE, CharEncoding.UTF16BE):
        # One code unit back lets a surrogate pair straddling start pair up
        return max(0, start - start % 2 - 2)

    if encoding is CharEncoding.UTF8:
        # Continuation bytes decode as single placeholders until the next lead byte
        return max(0, start - (MAX_TRIAL_LENGTH - 1))

    limit = _SYNC_BYTE_LIMITS.get(encoding)
    if limit is None:
        return start

    return _find_sync_byte(source, start, limit)


def decode_window(source: 'ByteSource', start: int, length: int,
                  encoding: CharEncoding) -> Tuple[int, DecodeMap]:
    """Decode a window of the source; returns (base, map) with map[0] at offset base."""

    base = sync_offset(source, start, encoding)
    return base, decode_for_display(source.read(base, start - base + length), encoding)
