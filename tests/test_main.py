import pytest

from binview.__main__ import apply_args, parse_args
from binview.config import Settings


def test_flags_override_settings() -> None:
    args = parse_args(["file.bin", "-e", "utf16le", "-w", "8", "--decimal", "--log-level", "info"])
    settings = apply_args(Settings(), args)

    assert settings.encoding == "UTF-16LE"
    assert settings.bytes_per_row == 8
    assert settings.addr_radix == 10
    assert settings.log_level == "INFO"


def test_no_flags_keep_settings() -> None:
    settings = apply_args(Settings(bytes_per_row=32), parse_args(["file.bin"]))
    assert settings == Settings(bytes_per_row=32)


def test_unknown_encoding_is_rejected() -> None:
    with pytest.raises(ValueError):
        apply_args(Settings(), parse_args(["file.bin", "-e", "klingon"]))


def test_bytes_per_row_out_of_range_is_rejected() -> None:
    with pytest.raises(ValueError):
        apply_args(Settings(), parse_args(["file.bin", "-w", "100"]))
