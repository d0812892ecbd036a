import pytest

from binview.core.encoding import (
    CharEncoding,
    byte_to_char,
    decode_bytes,
    encode_char,
    encode_string,
    grapheme_width,
    graphemes,
    is_displayable,
)


def test_next_cycles_through_every_encoding_and_wraps() -> None:
    seen = []
    encoding = CharEncoding.UTF8
    for _ in range(len(CharEncoding)):
        seen.append(encoding)
        encoding = encoding.next()

    assert encoding is CharEncoding.UTF8
    assert seen == list(CharEncoding)
    assert CharEncoding.LATIN1.next() is CharEncoding.UTF8


def test_display_names() -> None:
    assert [e.display_name for e in CharEncoding] == [
        "UTF-8", "UTF-16LE", "UTF-16BE", "Shift-JIS", "EUC-JP", "ISO-2022-JP", "ASCII", "Latin-1",
    ]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("utf8", CharEncoding.UTF8),
        ("UTF-16le", CharEncoding.UTF16LE),
        ("shift_jis", CharEncoding.SHIFT_JIS),
        ("Shift-JIS", CharEncoding.SHIFT_JIS),
        ("euc-jp", CharEncoding.EUC_JP),
        ("latin1", CharEncoding.LATIN1),
    ],
)
def test_from_name(name: str, expected: CharEncoding) -> None:
    assert CharEncoding.from_name(name) is expected


def test_from_name_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        CharEncoding.from_name("klingon")


def test_decode_and_encode_round_trip_text() -> None:
    data = "日本語".encode("cp932")
    assert decode_bytes(data, CharEncoding.SHIFT_JIS) == "日本語"
    assert encode_string("日本語", CharEncoding.SHIFT_JIS) == data


def test_decode_bytes_replaces_invalid_input() -> None:
    assert decode_bytes(b"A\xffB", CharEncoding.UTF8) == "A\ufffdB"


def test_encode_char_returns_none_when_unencodable() -> None:
    assert encode_char("é", CharEncoding.ASCII) is None
    assert encode_char("é", CharEncoding.LATIN1) == b"\xe9"
    assert encode_char("あ", CharEncoding.EUC_JP) == "あ".encode("euc_jp")


@pytest.mark.parametrize(
    "byte, expected",
    [(0x41, "A"), (0x20, " "), (0x7E, "~"), (0x00, "."), (0x7F, "."), (0x80, "."), (0xFF, ".")],
)
def test_byte_to_char(byte: int, expected: str) -> None:
    assert byte_to_char(byte) == expected


def test_graphemes_keep_combining_marks_together() -> None:
    assert graphemes("e\u0301x") == ["e\u0301", "x"]


def test_grapheme_width_counts_wide_characters() -> None:
    assert grapheme_width("a") == 1
    assert grapheme_width("日本") == 4
    assert grapheme_width("\x01") == 0


def test_is_displayable() -> None:
    assert is_displayable("A")
    assert is_displayable(" ")
    assert not is_displayable("")
    assert not is_displayable("\n")
    assert not is_displayable("\x85")
    assert not is_displayable("\ufffd")
