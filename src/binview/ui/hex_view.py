"""
Hex/ASCII dual-pane view rendered into a CellGrid.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..core.encoding import byte_to_char, is_printable_byte
from ..utils.hex_utils import format_offset
from .cells import CellGrid, Colors, Rect, Style
from .spans import Highlight, Selection, byte_spans, span_highlight

CURSOR_STYLE = Style(Colors.CURSOR, Colors.CURSOR_BG)
HEADER_STYLE = Style(Colors.HEADER, bold=True)
ADDR_STYLE = Style(Colors.ADDR)
HEX_EOF_PLACEHOLDER = "__"
ASCII_EOF_PLACEHOLDER = "_"


class ViewMode(Enum):
    """Pane that owns the cursor highlight."""

    HEX = "hex"
    ASCII = "ascii"
    DECODED = "decoded"

    def next(self) -> 'ViewMode':
        members = list(ViewMode)
        return members[(members.index(self) + 1) % len(members)]


def byte_color(byte: int) -> int:
    """Get the hex pane foreground color for a byte value."""

    if byte == 0x00:
        return Colors.HEX_ZERO
    if byte == 0xFF:
        return Colors.HEX_HIGH
    if is_printable_byte(byte):
        return Colors.HEX_PRINTABLE

    return Colors.HEX_NORMAL


def apply_highlight(style: Style, highlight: Highlight) -> Style:
    """Apply cursor or selection colors on top of a plain style."""

    if highlight is Highlight.CURSOR:
        return CURSOR_STYLE
    if highlight is Highlight.SELECTION:
        return style.with_bg(Colors.SELECTION_BG)

    return style


def address_width(addr_radix: int) -> int:
    return 8 if addr_radix == 16 else 10


@dataclass
class HexView:
    """
    Renders rows of address, hex bytes and ASCII for a byte source.

    data is the whole source (bytes, memoryview or ByteSource); offset is the
    address of the first visible row. The cursor may equal len(data), the
    append position, which is drawn as a placeholder in the active pane.
    """

    data: Sequence[int]
    offset: int = 0
    bytes_per_row: int = 16
    cursor: int = 0
    selection: Selection = None
    mode: ViewMode = ViewMode.HEX
    addr_radix: int = 16

    @property
    def addr_width(self) -> int:
        return address_width(self.addr_radix)

    def hex_column(self, index: int) -> int:
        """Column of the index-th hex slot of a row, relative to the view."""

        return self.addr_width + 2 + index * 3

    def ascii_column(self, index: int) -> int:
        """Column of the index-th ASCII cell of a row, relative to the view."""

        return self.hex_column(self.bytes_per_row) + 1 + index

    def row_width(self) -> int:
        return self.ascii_column(self.bytes_per_row)

    def format_addr(self, addr: int) -> str:
        return format_offset(addr, self.addr_radix)

    def header(self) -> str:
        columns = ' '.join(f"{i:02X}" for i in range(self.bytes_per_row))
        return f"{'Offset':<{self.addr_width}}  {columns}  ASCII"

    def row_visible(self, row_start: int) -> bool:
        """A row is drawn if it holds a byte or is the append row under the cursor."""

        size = len(self.data)
        if row_start < size:
            return True

        return row_start == size and self.cursor == size

    def render(self, grid: CellGrid, area: Optional[Rect] = None) -> None:
        """Draw the header and as many rows as fit in area."""

        area = area or grid.area
        if area.height <= 0:
            return

        grid.set_string(area.x, area.y, self.header()[:area.width], HEADER_STYLE)

        for row in range(area.height - 1):
            row_start = self.offset + row * self.bytes_per_row
            if not self.row_visible(row_start):
                break
            self.render_row(grid, row_start, area.x, area.y + 1 + row)

    def render_row(self, grid: CellGrid, row_start: int, x: int, y: int) -> None:
        """Draw one row of address, hex and ASCII cells."""

        size = len(self.data)
        row_end = min(row_start + self.bytes_per_row, size)
        row_bytes = bytes(self.data[row_start:row_end])

        grid.set_string(x, y, self.format_addr(row_start), ADDR_STYLE)

        for span in byte_spans(row_start, row_end):
            index = span.start - row_start
            byte = row_bytes[index]

            hex_style = apply_highlight(
                Style(byte_color(byte)),
                span_highlight(span, self.cursor, self.selection, self.mode is ViewMode.HEX),
            )
            grid.set_string(x + self.hex_column(index), y, f"{byte:02X}", hex_style)

            ascii_fg = Colors.ASCII_NORMAL if is_printable_byte(byte) else Colors.ASCII_CONTROL
            ascii_style = apply_highlight(
                Style(ascii_fg),
                span_highlight(span, self.cursor, self.selection, self.mode is ViewMode.ASCII),
            )
            grid.set_string(x + self.ascii_column(index), y, byte_to_char(byte), ascii_style)

        # EOF sentinel: the cursor may sit one past the last byte
        if self.cursor == size and row_start <= size < row_start + self.bytes_per_row:
            index = size - row_start
            if self.mode is ViewMode.HEX:
                grid.set_string(x + self.hex_column(index), y, HEX_EOF_PLACEHOLDER, CURSOR_STYLE)
            elif self.mode is ViewMode.ASCII:
                grid.set_string(x + self.ascii_column(index), y, ASCII_EOF_PLACEHOLDER, CURSOR_STYLE)
