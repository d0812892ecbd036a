from typing import List
from unittest import mock

import pytest

from binview.config import Settings
from binview.core.decode import decode_for_display, iter_units
from binview.core.encoding import CharEncoding
from binview.core.source import ByteSource
from binview.ui import window
from binview.ui.window import WindowManager


def _fake_window(height: int, width: int, *_) -> mock.Mock:
    win = mock.Mock()
    win.getmaxyx.return_value = (height, width)
    return win


@pytest.fixture(autouse=True)
def fake_curses():
    with mock.patch.object(window.curses, "start_color"), \
            mock.patch.object(window.curses, "newwin", side_effect=_fake_window):
        yield


def _manager(data: bytes, encoding: CharEncoding, bytes_per_row: int, top_row: int) -> WindowManager:
    settings = Settings(bytes_per_row=bytes_per_row, encoding=encoding.value)
    wm = WindowManager(_fake_window(12, 200), ByteSource(data), settings)
    wm.top_row = top_row
    return wm


def _preview_rows(wm: WindowManager) -> List[str]:
    with mock.patch.object(window, "blit_grid") as blit:
        wm.draw_text_view()

    grid = blit.call_args[0][1]
    return [grid.row_text(y).rstrip() for y in range(1, grid.height)]


def _expected_rows(data: bytes, encoding: CharEncoding, bytes_per_row: int, top_row: int, count: int) -> List[str]:
    units = list(iter_units(decode_for_display(data, encoding)))
    rows = []
    for row in range(top_row, top_row + count):
        start = row * bytes_per_row
        end = min(start + bytes_per_row, len(data))
        rows.append("".join(unit.display for offset, unit in units if start <= offset < end).rstrip())
    return rows


def test_scrolled_utf16_preview_with_odd_row_width() -> None:
    data = "".join(chr(ord("A") + i % 26) for i in range(60)).encode("utf-16-le")
    wm = _manager(data, CharEncoding.UTF16LE, bytes_per_row=15, top_row=1)

    rows = _preview_rows(wm)

    assert rows[0] == "IJKLMNO"
    assert rows == _expected_rows(data, CharEncoding.UTF16LE, 15, 1, len(rows))


def test_scrolled_shift_jis_preview_keeps_split_character() -> None:
    data = b"A" + ("あいうえおかきくけこ" * 6).encode("cp932")
    wm = _manager(data, CharEncoding.SHIFT_JIS, bytes_per_row=16, top_row=1)

    rows = _preview_rows(wm)

    assert rows[0] == "けこあいうえおか"
    assert rows == _expected_rows(data, CharEncoding.SHIFT_JIS, 16, 1, len(rows))


@pytest.mark.parametrize(
    "encoding, data",
    [
        (CharEncoding.UTF8, ("x" + "日本語\U0001F600" * 8).encode("utf-8")),
        (CharEncoding.UTF16BE, ("x\U0001F600" * 20).encode("utf-16-be")),
        (CharEncoding.EUC_JP, ("a" + "漢字テキスト" * 8).encode("euc_jp")),
        (CharEncoding.LATIN1, bytes(range(256))),
    ],
)
@pytest.mark.parametrize("top_row", [1, 2, 3])
def test_scrolled_preview_matches_full_decode(encoding: CharEncoding, data: bytes, top_row: int) -> None:
    wm = _manager(data, encoding, bytes_per_row=7, top_row=top_row)

    rows = _preview_rows(wm)

    assert rows == _expected_rows(data, encoding, 7, top_row, len(rows))


def test_selection_is_clamped_to_last_byte() -> None:
    wm = _manager(b"abcd", CharEncoding.UTF8, bytes_per_row=16, top_row=0)
    wm.selection_anchor = 1
    wm.cursor = 4

    assert wm.selection == (1, 3)
