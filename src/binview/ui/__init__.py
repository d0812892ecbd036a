"""
UI package for the hex viewer interface components.

This package implements the cell-grid renderers (HexView for the hex/ASCII
panes and DecodedView for the decoded text preview) and the curses layer that
blits them: the WindowManager for layout and the InputHandler for key handling.
"""

from .cells import CellGrid, Colors, Rect, Style
from .hex_view import HexView, ViewMode
from .text_view import DecodedView

__all__ = ['CellGrid', 'Colors', 'Rect', 'Style', 'HexView', 'ViewMode', 'DecodedView']
