"""
Styled terminal cell grid that views render into.
"""

import curses
from dataclasses import dataclass, replace
from typing import Final, List, NamedTuple

DEFAULT_COLOR: Final[int] = -1
GRAY: Final[int] = 8  # Bright black, as used for line numbers


class Colors:
    """Default color scheme for the hex and text panes."""

    ADDR = curses.COLOR_CYAN
    HEX_NORMAL = curses.COLOR_WHITE
    HEX_ZERO = GRAY
    HEX_HIGH = curses.COLOR_RED
    HEX_PRINTABLE = curses.COLOR_GREEN
    ASCII_NORMAL = curses.COLOR_WHITE
    ASCII_CONTROL = GRAY
    CURSOR = curses.COLOR_BLACK
    CURSOR_BG = curses.COLOR_YELLOW
    SELECTION_BG = curses.COLOR_BLUE
    HEADER = curses.COLOR_YELLOW


@dataclass(frozen=True)
class Style:
    """Foreground, background and bold flag of a cell."""

    fg: int = DEFAULT_COLOR
    bg: int = DEFAULT_COLOR
    bold: bool = False

    def with_bg(self, bg: int) -> 'Style':
        return replace(self, bg=bg)


class Cell(NamedTuple):
    glyph: str
    style: Style


BLANK = Cell(' ', Style())


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int


class CellGrid:
    """Fixed-size grid of cells addressed by row and column."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.rows: List[List[Cell]] = [[BLANK] * width for _ in range(height)]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def get(self, x: int, y: int) -> Cell:
        return self.rows[y][x]

    def set_cell(self, x: int, y: int, glyph: str, style: Style) -> None:
        """Set one cell, ignoring positions outside the grid."""

        if 0 <= y < self.height and 0 <= x < self.width:
            self.rows[y][x] = Cell(glyph, style)

    def set_string(self, x: int, y: int, text: str, style: Style) -> int:
        """Write text one character per cell, truncating at the right edge.

        Returns the column after the last character written.
        """

        for ch in text:
            self.set_cell(x, y, ch, style)
            x += 1

        return x

    def row_text(self, y: int) -> str:
        """Get the glyphs of a row as a string."""

        return ''.join(cell.glyph for cell in self.rows[y])
