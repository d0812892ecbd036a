from binview.core.decode import decode_for_display
from binview.core.encoding import CharEncoding
from binview.ui.spans import CellSpan, Highlight, byte_spans, span_highlight, unit_spans


def test_byte_spans_cover_each_offset() -> None:
    assert list(byte_spans(3, 6)) == [CellSpan(3, 1), CellSpan(4, 1), CellSpan(5, 1)]


def test_unit_spans_follow_decoded_units() -> None:
    decode_map = decode_for_display("a日".encode("utf-8"), CharEncoding.UTF8)
    assert list(unit_spans(decode_map)) == [CellSpan(0, 1), CellSpan(1, 3)]


def test_cursor_wins_over_selection_only_in_active_pane() -> None:
    span = CellSpan(4, 1)

    assert span_highlight(span, 4, (0, 10), pane_active=True) is Highlight.CURSOR
    assert span_highlight(span, 4, (0, 10), pane_active=False) is Highlight.SELECTION
    assert span_highlight(span, 4, None, pane_active=False) is Highlight.NONE


def test_selection_bounds_are_inclusive() -> None:
    assert span_highlight(CellSpan(2, 1), 99, (2, 5), True) is Highlight.SELECTION
    assert span_highlight(CellSpan(5, 1), 99, (2, 5), True) is Highlight.SELECTION
    assert span_highlight(CellSpan(6, 1), 99, (2, 5), True) is Highlight.NONE
    assert span_highlight(CellSpan(1, 1), 99, (2, 5), True) is Highlight.NONE


def test_multi_byte_span_matches_cursor_and_selection_inside_it() -> None:
    span = CellSpan(1, 3)

    assert span.end == 4
    assert span_highlight(span, 3, None, True) is Highlight.CURSOR
    assert span_highlight(span, 4, None, True) is Highlight.NONE
    assert span_highlight(span, 99, (3, 3), True) is Highlight.SELECTION
    assert span_highlight(span, 99, (0, 0), True) is Highlight.NONE


def test_unit_spans_use_source_offsets_within_a_window() -> None:
    decode_map = decode_for_display("a日bc".encode("utf-8"), CharEncoding.UTF8)

    assert list(unit_spans(decode_map, base=100)) == [
        CellSpan(100, 1), CellSpan(101, 3), CellSpan(104, 1), CellSpan(105, 1),
    ]
    assert list(unit_spans(decode_map, base=100, start=102, end=105)) == [CellSpan(104, 1)]
    assert list(unit_spans(decode_map, base=100, start=90, end=102)) == [CellSpan(100, 1), CellSpan(101, 3)]
