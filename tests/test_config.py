import json
import logging
from pathlib import Path

import pytest

from binview.config import Settings, load_settings, save_settings
from binview.core.encoding import CharEncoding
from binview.utils.hex_utils import HexFormat


def test_missing_config_gives_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.json")

    assert settings == Settings()
    assert settings.char_encoding is CharEncoding.UTF8
    assert settings.hex_text_format is HexFormat.SPACED


def test_valid_values_are_loaded(tmp_path: Path) -> None:
    path = tmp_path / "binview.json"
    path.write_text(json.dumps({
        "bytes_per_row": 8,
        "addr_radix": 10,
        "encoding": "shift_jis",
        "hex_format": "c_array",
        "log_level": "debug",
    }), encoding="utf-8")

    settings = load_settings(path)

    assert settings.bytes_per_row == 8
    assert settings.addr_radix == 10
    assert settings.char_encoding is CharEncoding.SHIFT_JIS
    assert settings.hex_text_format is HexFormat.C_ARRAY
    assert settings.log_level == "debug"


def test_invalid_values_fall_back_per_key(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "binview.json"
    path.write_text(json.dumps({
        "bytes_per_row": 0,
        "addr_radix": 8,
        "encoding": "klingon",
        "hex_format": "octal",
        "log_file": None,
        "unknown": True,
    }), encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="binview.config"):
        settings = load_settings(path)

    assert settings.bytes_per_row == 16
    assert settings.addr_radix == 16
    assert settings.encoding == "UTF-8"
    assert settings.hex_format == "spaced"
    assert settings.log_file is None
    assert "bytes_per_row" in caplog.text


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", ""])
def test_malformed_config_is_ignored(tmp_path: Path, content: str) -> None:
    path = tmp_path / "binview.json"
    path.write_text(content, encoding="utf-8")

    assert load_settings(path) == Settings()


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "binview.json"
    settings = Settings(bytes_per_row=32, encoding="EUC-JP", log_file=None)

    assert save_settings(settings, path)
    assert load_settings(path) == settings
