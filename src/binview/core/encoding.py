"""
Character encoding table and byte/text conversion primitives.
"""

import unicodedata
from enum import Enum
from typing import Dict, Final, List, Optional

import regex
from wcwidth import wcswidth

REPLACEMENT_CHARACTER: Final[str] = '\ufffd'
PLACEHOLDER: Final[str] = '.'

_GRAPHEME_PATTERN = regex.compile(r'\X')


class CharEncoding(Enum):
    """Supported character encodings, in UI cycling order."""

    UTF8 = "UTF-8"
    UTF16LE = "UTF-16LE"
    UTF16BE = "UTF-16BE"
    SHIFT_JIS = "Shift-JIS"
    EUC_JP = "EUC-JP"
    ISO2022JP = "ISO-2022-JP"
    ASCII = "ASCII"
    LATIN1 = "Latin-1"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def codec(self) -> str:
        """Python codec name used for this encoding."""
        return CODEC_NAMES[self]

    def next(self) -> 'CharEncoding':
        """Get the encoding that follows this one in the cycle."""

        members = list(CharEncoding)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def from_name(cls, name: str) -> 'CharEncoding':
        """Resolve a user supplied name such as 'utf8', 'Shift_JIS' or 'latin-1'."""

        wanted = _normalize_name(name)
        for member in cls:
            if wanted in (_normalize_name(member.value), _normalize_name(member.name)):
                return member

        raise ValueError(f"Unknown encoding: {name}")


CODEC_NAMES: Final[Dict[CharEncoding, str]] = {
    CharEncoding.UTF8: 'utf-8',
    CharEncoding.UTF16LE: 'utf-16-le',
    CharEncoding.UTF16BE: 'utf-16-be',
    CharEncoding.SHIFT_JIS: 'cp932',
    CharEncoding.EUC_JP: 'euc_jp',
    CharEncoding.ISO2022JP: 'iso2022_jp',
    CharEncoding.ASCII: 'ascii',
    CharEncoding.LATIN1: 'latin-1',
}


def _normalize_name(name: str) -> str:
    return ''.join(c for c in name.lower() if c.isalnum())


def decode_bytes(data: bytes, encoding: CharEncoding) -> str:
    """Decode bytes to text, replacing invalid sequences with U+FFFD."""

    return bytes(data).decode(encoding.codec, errors='replace')


def encode_string(text: str, encoding: CharEncoding) -> bytes:
    """Encode text, replacing characters the encoding cannot represent."""

    return text.encode(encoding.codec, errors='replace')


def encode_char(ch: str, encoding: CharEncoding) -> Optional[bytes]:
    """
    Encode a single character.

    Args:
        ch (str): Character (or grapheme cluster) to encode
        encoding (CharEncoding): Target encoding

    Returns:
        bytes: Encoded bytes or None if the encoding cannot represent it
    """

    try:
        return ch.encode(encoding.codec)
    except UnicodeEncodeError:
        return None


def is_printable_byte(byte: int) -> bool:
    """Check whether a byte is printable ASCII or a space."""

    return 0x20 <= byte <= 0x7E


def byte_to_char(byte: int) -> str:
    """Convert one byte to its ASCII pane glyph, '.' outside the printable range."""

    if is_printable_byte(byte):
        return chr(byte)

    return PLACEHOLDER


def graphemes(text: str) -> List[str]:
    """Split text into extended grapheme clusters."""

    return _GRAPHEME_PATTERN.findall(text)


def grapheme_width(text: str) -> int:
    """Terminal column width of text, counting non-printable clusters as 0."""

    total = 0
    for cluster in graphemes(text):
        width = wcswidth(cluster)
        if width > 0:
            total += width

    return total


def is_displayable(text: str) -> bool:
    """Check whether decoded text may be shown as-is instead of a placeholder."""

    if not text:
        return False

    ch = text[0]
    if ch != ' ' and unicodedata.category(ch) == 'Cc':
        return False

    return ch != REPLACEMENT_CHARACTER
