"""
Input handler module for processing keyboard events.
"""

import curses
import logging
from typing import Callable, Dict

from ..core.encoding import decode_bytes
from ..core.errors import ClipboardError
from ..utils.clipboard import copy_hex_to_all, copy_text_to_all
from .window import WindowManager

logger = logging.getLogger(__name__)


class InputHandler:
    """Handles keyboard input and executes corresponding actions."""

    def __init__(self, window_manager: WindowManager) -> None:
        self.window_manager = window_manager
        self.window_manager.input_handler = self
        self.command_handlers: Dict[int, Callable[[], None]] = self._setup_handlers()

    def _setup_handlers(self) -> Dict[int, Callable[[], None]]:
        """Set up the keyboard command handlers."""

        return {
            curses.KEY_LEFT: self._move_left,
            curses.KEY_RIGHT: self._move_right,
            curses.KEY_UP: self._move_up,
            curses.KEY_DOWN: self._move_down,
            curses.KEY_HOME: self._move_line_start,
            curses.KEY_END: self._move_line_end,
            curses.KEY_PPAGE: self._page_up,
            curses.KEY_NPAGE: self._page_down,

            ord('\t'): self._cycle_view_mode,
            ord('e'): self._cycle_encoding,
            ord('f'): self._cycle_hex_format,
            ord('r'): self._toggle_radix,
            ord('v'): self._toggle_selection,
            ord('y'): self._copy_hex,
            ord('t'): self._copy_text,
        }

    def handle_input(self, ch: int) -> bool:
        """Handle a single keyboard input. Returns False if should quit."""

        if ch in (ord('q'), ord('x') & 0x1f):  # q or Ctrl + X
            return False

        if ch == 27:  # Escape clears the selection
            self.window_manager.selection_anchor = None
            return True

        if ch in self.command_handlers:
            self.command_handlers[ch]()

        return True

    def _set_cursor(self, position: int) -> None:
        """Move the cursor, clamped to [0, size]; size is the append position."""

        wm = self.window_manager
        wm.cursor = max(0, min(position, wm.size))

    def _move_left(self) -> None:
        self._set_cursor(self.window_manager.cursor - 1)

    def _move_right(self) -> None:
        self._set_cursor(self.window_manager.cursor + 1)

    def _move_up(self) -> None:
        wm = self.window_manager
        if wm.cursor >= wm.bytes_per_row:
            self._set_cursor(wm.cursor - wm.bytes_per_row)

    def _move_down(self) -> None:
        wm = self.window_manager
        if wm.cursor + wm.bytes_per_row <= wm.size:
            self._set_cursor(wm.cursor + wm.bytes_per_row)

    def _move_line_start(self) -> None:
        wm = self.window_manager
        self._set_cursor(wm.cursor - wm.cursor % wm.bytes_per_row)

    def _move_line_end(self) -> None:
        wm = self.window_manager
        line_start = wm.cursor - wm.cursor % wm.bytes_per_row
        self._set_cursor(line_start + wm.bytes_per_row - 1)

    def _page_up(self) -> None:
        wm = self.window_manager
        self._set_cursor(wm.cursor - wm.visible_rows * wm.bytes_per_row)

    def _page_down(self) -> None:
        wm = self.window_manager
        self._set_cursor(wm.cursor + wm.visible_rows * wm.bytes_per_row)

    def _cycle_view_mode(self) -> None:
        wm = self.window_manager
        wm.mode = wm.mode.next()

    def _cycle_encoding(self) -> None:
        wm = self.window_manager
        wm.encoding = wm.encoding.next()
        logger.info("Encoding switched to %s", wm.encoding.display_name)
        wm.set_status(f"Encoding: {wm.encoding.display_name}")

    def _cycle_hex_format(self) -> None:
        wm = self.window_manager
        wm.hex_format = wm.hex_format.next()
        wm.set_status(f"Copy format: {wm.hex_format.value}")

    def _toggle_radix(self) -> None:
        wm = self.window_manager
        wm.addr_radix = 10 if wm.addr_radix == 16 else 16
        wm.setup_windows()

    def _toggle_selection(self) -> None:
        wm = self.window_manager
        if wm.selection_anchor is None:
            wm.selection_anchor = wm.cursor
            return

        wm.selection_anchor = None

    def _selected_bytes(self) -> bytes:
        """Get the selected bytes, or the byte under the cursor without a selection."""

        wm = self.window_manager
        if wm.selection is None:
            return wm.source.read(wm.cursor, 1)

        start, end = wm.selection
        return wm.source.read(start, end - start + 1)

    def _copy_hex(self) -> None:
        wm = self.window_manager
        data = self._selected_bytes()
        if not data:
            wm.set_status("Nothing to copy")
            return

        try:
            copy_hex_to_all(data, wm.hex_format)
        except ClipboardError as e:
            wm.set_status(f"Error: {e}")
            return

        wm.set_status(f"Copied {len(data)} bytes as hex")

    def _copy_text(self) -> None:
        wm = self.window_manager
        data = self._selected_bytes()
        if not data:
            wm.set_status("Nothing to copy")
            return

        text = decode_bytes(data, wm.encoding)
        try:
            copy_text_to_all(text)
        except ClipboardError as e:
            wm.set_status(f"Error: {e}")
            return

        wm.set_status(f"Copied {len(text)} characters")
