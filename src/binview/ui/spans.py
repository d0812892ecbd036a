"""
Byte-offset spans shared by the hex, ASCII and decoded panes.

A pane shows a sequence of cell spans, each covering one or more byte
offsets. Cursor and selection highlighting is computed per span here, so the
raw panes (one byte per span) and the decoded pane (one unit per span) follow
the same precedence rules.
"""

from enum import Enum
from typing import Iterator, NamedTuple, Optional, Tuple

from ..core.decode import DecodeMap

Selection = Optional[Tuple[int, int]]


class CellSpan(NamedTuple):
    start: int
    length: int

    @property
    def end(self) -> int:
        """Offset one past the last byte of the span."""
        return self.start + self.length

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


class Highlight(Enum):
    NONE = 0
    CURSOR = 1
    SELECTION = 2


def byte_spans(start: int, end: int) -> Iterator[CellSpan]:
    """Yield one-byte spans for offsets in [start, end)."""

    for offset in range(start, end):
        yield CellSpan(offset, 1)


def unit_spans(decode_map: DecodeMap, base: int = 0,
               start: Optional[int] = None, end: Optional[int] = None) -> Iterator[CellSpan]:
    """
    Yield the spans of the decoded units of a decode map.

    Args:
        decode_map (list): Decode map whose first slot is source offset base
        base (int): Source offset of decode_map[0]
        start (int): Only yield units starting at or after this offset
        end (int): Only yield units starting before this offset

    Returns:
        Iterator[CellSpan]: Spans in source offsets, ascending
    """

    first = 0 if start is None else max(0, start - base)
    last = len(decode_map) if end is None else max(first, min(len(decode_map), end - base))

    for index in range(first, last):
        unit = decode_map[index]
        if unit is not None:
            yield CellSpan(base + index, unit.byte_len)


def span_highlight(span: CellSpan, cursor: int, selection: Selection, pane_active: bool) -> Highlight:
    """
    Decide how a span is highlighted; the cursor wins over the selection.

    Args:
        span (CellSpan): Span being drawn
        cursor (int): Cursor byte offset
        selection (tuple): Inclusive (start, end) byte offsets or None
        pane_active (bool): Whether this pane owns the cursor in the current view mode

    Returns:
        Highlight: CURSOR, SELECTION or NONE
    """

    if pane_active and span.contains(cursor):
        return Highlight.CURSOR

    if selection is not None:
        start, end = selection
        if span.start <= end and start < span.end:
            return Highlight.SELECTION

    return Highlight.NONE
