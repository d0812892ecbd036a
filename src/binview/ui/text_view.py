"""
Decoded text preview pane.

Shows the units of a decode map row by row, aligned with the hex view: a row
holds the units that start within its bytes_per_row offsets. Wide units take
two columns. Cursor and selection highlight whole units.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.decode import DecodeMap
from ..core.encoding import PLACEHOLDER, CharEncoding
from .cells import CellGrid, Colors, Rect, Style
from .hex_view import ASCII_EOF_PLACEHOLDER, CURSOR_STYLE, HEADER_STYLE, ViewMode, apply_highlight
from .spans import Selection, span_highlight, unit_spans

CONTINUATION = ''


@dataclass
class DecodedView:
    """Renders a decode map covering source offsets [base, base + len(decode_map))."""

    decode_map: DecodeMap
    size: int
    base: int = 0
    offset: int = 0
    bytes_per_row: int = 16
    cursor: int = 0
    selection: Selection = None
    mode: ViewMode = ViewMode.HEX
    encoding: CharEncoding = CharEncoding.UTF8

    def pane_width(self) -> int:
        return self.bytes_per_row * 2

    def header(self) -> str:
        return f"Text ({self.encoding.display_name})"

    def row_visible(self, row_start: int) -> bool:
        if row_start < self.size:
            return True

        return row_start == self.size and self.cursor == self.size

    def render(self, grid: CellGrid, area: Optional[Rect] = None) -> None:
        area = area or grid.area
        if area.height <= 0:
            return

        grid.set_string(area.x, area.y, self.header()[:area.width], HEADER_STYLE)

        for row in range(area.height - 1):
            row_start = self.offset + row * self.bytes_per_row
            if not self.row_visible(row_start):
                break
            self.render_row(grid, row_start, area.x, area.y + 1 + row, area.x + area.width)

    def render_row(self, grid: CellGrid, row_start: int, x: int, y: int, right: int) -> None:
        active = self.mode is ViewMode.DECODED
        row_end = min(row_start + self.bytes_per_row, self.size)
        col = x

        for span in unit_spans(self.decode_map, self.base, row_start, row_end):
            unit = self.decode_map[span.start - self.base]
            if col + unit.width > right:
                break

            fg = Colors.ASCII_CONTROL if unit.display == PLACEHOLDER else Colors.ASCII_NORMAL
            style = apply_highlight(Style(fg), span_highlight(span, self.cursor, self.selection, active))

            grid.set_cell(col, y, unit.display, style)
            for extra in range(1, unit.width):
                grid.set_cell(col + extra, y, CONTINUATION, style)
            col += unit.width

        if active and self.cursor == self.size and row_start <= self.size < row_start + self.bytes_per_row:
            grid.set_cell(col, y, ASCII_EOF_PLACEHOLDER, CURSOR_STYLE)
