"""Testy Span i SourceMap."""

from __future__ import annotations

from data_model import SourceMap, Span


class TestSourceMap:
    def test_line_count_counts_trailing_empty_line(self) -> None:
        assert SourceMap("a\nb\n").line_count == 3
        assert SourceMap("").line_count == 1

    def test_span_on_second_line(self) -> None:
        span = SourceMap("ab\ncd").span(3, 5)
        assert (span.start_line, span.start_column) == (2, 1)
        assert (span.end_line, span.end_column) == (2, 3)
        assert (span.start, span.end) == (3, 5)

    def test_byte_offsets_use_utf8(self) -> None:
        source = SourceMap("zażółć\nx")
        span = source.span(0, 6)
        assert span.start == 0
        assert span.end == 10
        assert span.end_column == 7
        assert source.position(7) == (11, 2, 1)

    def test_offset_of_inverts_position(self) -> None:
        source = SourceMap("# build\necho ${x}\n")
        offset = source.offset_of(2, 6)
        assert source.text[offset:offset + 4] == "${x}"
        _, line, column = source.position(offset)
        assert (line, column) == (2, 6)

    def test_position_is_clamped_to_document(self) -> None:
        source = SourceMap("abc")
        assert source.position(100) == (3, 1, 4)

    def test_line_start(self) -> None:
        source = SourceMap("one\ntwo\nthree")
        assert source.line_start(1) == 0
        assert source.line_start(3) == 8


class TestSpan:
    def test_cover_is_symmetric(self) -> None:
        source = SourceMap("first\nsecond\nthird")
        a = source.span(0, 5)
        b = source.span(13, 18)
        merged = a.cover(b)
        assert merged == b.cover(a)
        assert (merged.start_line, merged.end_line) == (1, 3)
        assert merged.start == 0 and merged.end == 18

    def test_spans_are_hashable_values(self) -> None:
        a = Span(0, 1, 1, 1, 1, 2)
        assert a == Span(0, 1, 1, 1, 1, 2)
        assert len({a, Span(0, 1, 1, 1, 1, 2)}) == 1
