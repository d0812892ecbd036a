"""
Window management module for the viewer UI.
"""

import curses
import logging
import os
import time
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from ..config import Settings
from ..core.decode import decode_window
from ..core.source import ByteSource
from .cells import CellGrid
from .hex_view import HexView, ViewMode
from .spans import Selection
from .text_view import CONTINUATION, DecodedView

if TYPE_CHECKING:
    from .input_handler import InputHandler

logger = logging.getLogger(__name__)

# Extra bytes decoded past the visible window so the last unit is complete
DECODE_LOOKAHEAD = 3


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        pass


class ColorPairs:
    """Allocates curses color pairs on demand for (fg, bg) combinations."""

    def __init__(self) -> None:
        self.pairs: Dict[Tuple[int, int], int] = {}

    def attr(self, fg: int, bg: int) -> int:
        key = (fg, bg)
        if key not in self.pairs:
            number = len(self.pairs) + 1
            if number >= curses.COLOR_PAIRS:
                return curses.A_NORMAL
            try:
                curses.init_pair(number, fg, bg)
            except curses.error as e:
                logger.warning("init_pair(%d, %d, %d) failed: %s", number, fg, bg, e)
                number = 0
            self.pairs[key] = number

        return curses.color_pair(self.pairs[key])


def blit_grid(window: 'curses.window', grid: CellGrid, pairs: ColorPairs) -> None:
    """Copy a cell grid into a curses window."""

    height, width = window.getmaxyx()
    for y in range(min(grid.height, height)):
        for x in range(min(grid.width, width)):
            cell = grid.get(x, y)
            if cell.glyph == CONTINUATION:
                continue

            attr = pairs.attr(cell.style.fg, cell.style.bg)
            if cell.style.bold:
                attr |= curses.A_BOLD

            try:
                window.addstr(y, x, cell.glyph, attr)
            except curses.error:
                pass


class WindowManager:
    """Manages the curses windows and the viewer state they display."""

    STATUS_MESSAGE_DURATION = 3
    PANE_GAP = 2

    def __init__(self, stdscr: 'curses.window', source: ByteSource, settings: Settings) -> None:
        self.stdscr = stdscr
        self.height, self.width = stdscr.getmaxyx()

        if self.height < 10 or self.width < 40:
            raise ValueError(f"Terminal too small. Minimum size: 40x10, Current size: {self.width}x{self.height}")

        self.source = source
        self.cursor = 0
        self.selection_anchor: Optional[int] = None
        self.top_row = 0
        self.mode = ViewMode.HEX
        self.encoding = settings.char_encoding
        self.hex_format = settings.hex_text_format
        self.addr_radix = settings.addr_radix
        self.bytes_per_row = settings.bytes_per_row

        self.hex_window: Optional['curses.window'] = None
        self.text_window: Optional['curses.window'] = None
        self.status_window: Optional['curses.window'] = None
        self.input_handler: Optional['InputHandler'] = None
        self.status_message: Optional[str] = None
        self.status_message_time = 0.0

        curses.start_color()
        self.color_pairs = ColorPairs()

        self.setup_windows()

    @property
    def size(self) -> int:
        return len(self.source)

    @property
    def visible_rows(self) -> int:
        """Data rows that fit below the pane headers."""
        return max(1, self.height - 2)

    @property
    def selection(self) -> Selection:
        """Inclusive selection between the anchor and the cursor, if any."""

        if self.selection_anchor is None or self.size == 0:
            return None

        last = self.size - 1
        start = min(self.selection_anchor, self.cursor, last)
        end = min(max(self.selection_anchor, self.cursor), last)
        return (start, end)

    def setup_windows(self) -> None:
        """Create and position all windows."""

        if self.height < 10 or self.width < 40:
            return

        hex_width = min(self._hex_view().row_width() + 1, self.width)
        self.hex_window = curses.newwin(self.height - 1, hex_width, 0, 0)

        text_x = hex_width + self.PANE_GAP
        self.text_window = None
        if text_x < self.width:
            self.text_window = curses.newwin(self.height - 1, self.width - text_x, 0, text_x)

        self.status_window = curses.newwin(1, self.width, self.height - 1, 0)

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.status_message_time = 0.0

    def scroll_to_cursor(self) -> None:
        """Adjust the first visible row so the cursor row is on screen."""

        cursor_row = self.cursor // self.bytes_per_row
        if cursor_row < self.top_row:
            self.top_row = cursor_row
        elif cursor_row >= self.top_row + self.visible_rows:
            self.top_row = cursor_row - self.visible_rows + 1

    def _hex_view(self) -> HexView:
        return HexView(
            data=self.source,
            offset=self.top_row * self.bytes_per_row,
            bytes_per_row=self.bytes_per_row,
            cursor=self.cursor,
            selection=self.selection,
            mode=self.mode,
            addr_radix=self.addr_radix,
        )

    def refresh_all(self) -> None:
        """Refresh all windows."""

        self.scroll_to_cursor()
        self.draw_hex_view()
        self.draw_text_view()
        self.draw_status()
        curses.doupdate()

    def draw_hex_view(self) -> None:
        """Draw the address, hex and ASCII panes."""

        if not self.hex_window:
            return

        height, width = self.hex_window.getmaxyx()
        grid = CellGrid(width, height)
        self._hex_view().render(grid)

        self.hex_window.erase()
        blit_grid(self.hex_window, grid, self.color_pairs)
        self.hex_window.noutrefresh()

    def draw_text_view(self) -> None:
        """Draw the decoded text preview."""

        if not self.text_window:
            return

        height, width = self.text_window.getmaxyx()
        start = self.top_row * self.bytes_per_row
        base, decode_map = decode_window(
            self.source, start, self.visible_rows * self.bytes_per_row + DECODE_LOOKAHEAD, self.encoding
        )

        view = DecodedView(
            decode_map=decode_map,
            size=self.size,
            base=base,
            offset=start,
            bytes_per_row=self.bytes_per_row,
            cursor=self.cursor,
            selection=self.selection,
            mode=self.mode,
            encoding=self.encoding,
        )
        grid = CellGrid(width, height)
        view.render(grid)

        self.text_window.erase()
        blit_grid(self.text_window, grid, self.color_pairs)
        self.text_window.noutrefresh()

    def draw_status(self) -> None:
        """Draw the status bar."""

        if not self.status_window:
            return

        self.status_window.erase()
        self.status_window.attron(curses.A_BOLD | curses.A_REVERSE)

        if self.status_message:
            if self.status_message_time == 0:
                self.status_message_time = time.time()
            elif time.time() - self.status_message_time > self.STATUS_MESSAGE_DURATION:
                self.status_message = None
                self.status_message_time = 0.0

        if self.status_message:
            attr = curses.A_BOLD | curses.A_REVERSE
            if self.status_message.startswith("Error:"):
                attr |= self.color_pairs.attr(curses.COLOR_RED, -1)
            safe_addstr(self.status_window, 0, 0, (" " + self.status_message).ljust(self.width - 1), attr)
            self.status_window.attroff(curses.A_BOLD | curses.A_REVERSE)
            self.status_window.noutrefresh()
            return

        name = os.path.basename(self.source.filename) if self.source.filename else '[stdin]'
        status = f" {name} [{self.size} bytes] [{self.encoding.display_name}] "
        status += f"[{self.mode.value}] [{self.hex_format.value}] "
        if self.selection is not None:
            start, end = self.selection
            status += f"[Sel: {end - start + 1}] "

        pos_info = f"Offset: 0x{self.cursor:08X} "

        available_width = self.width - len(pos_info) - 1
        if len(status) > available_width:
            status = status[:max(0, available_width - 3)] + "... "
        else:
            status += " " * (available_width - len(status))

        safe_addstr(self.status_window, 0, 0, status + pos_info)
        self.status_window.attroff(curses.A_BOLD | curses.A_REVERSE)
        self.status_window.noutrefresh()

    def resize(self) -> None:
        """Handle terminal resize events."""

        self.height, self.width = self.stdscr.getmaxyx()

        if self.height < 10 or self.width < 40:
            self.set_status("Error: Terminal too small")
            return

        self.setup_windows()
