"""Testy skanera bloków maskfile."""

from __future__ import annotations

import pytest

from data_model import CodeFence, Heading, Text
from data_model.codes import RuleCode
from maskfile import ScanError, scan_blocks


def _scan(text: str) -> list:
    return list(scan_blocks(text))


class TestBlocks:
    def test_heading_text_and_fence(self) -> None:
        text = "# build\n\nSome text\nmore\n\n```bash\necho hi\n```\n"
        heading, paragraph, fence = _scan(text)

        assert isinstance(heading, Heading)
        assert heading.depth == 1
        assert heading.text == "build"
        assert (heading.span.start_line, heading.span.end_column) == (1, 8)

        assert isinstance(paragraph, Text)
        assert paragraph.content == "Some text\nmore"
        assert [s.start_line for s in paragraph.line_spans] == [3, 4]
        assert (paragraph.span.start_line, paragraph.span.end_line) == (3, 4)

        assert isinstance(fence, CodeFence)
        assert fence.interpreter == "bash"
        assert fence.body == "echo hi"
        assert (fence.span.start_line, fence.span.end_line) == (6, 8)
        assert (fence.body_span.start_line, fence.body_span.end_column) == (7, 8)

    def test_blank_lines_are_not_emitted(self) -> None:
        assert _scan("\n\n   \n") == []

    def test_heading_closing_sequence_is_stripped(self) -> None:
        (heading,) = _scan("## deploy ##")
        assert heading.depth == 2
        assert heading.text == "deploy"

    def test_hash_without_space_is_text(self) -> None:
        (block,) = _scan("#nospace")
        assert isinstance(block, Text)

    def test_interpreter_is_first_word_of_info_string(self) -> None:
        (_, fence) = _scan("# t\n```python title=x\nprint(1)\n```")
        assert fence.interpreter == "python"

    def test_fence_without_info_has_no_interpreter(self) -> None:
        (_, fence) = _scan("# t\n```\necho\n```")
        assert fence.interpreter is None

    def test_empty_fence(self) -> None:
        (_, fence) = _scan("# t\n```sh\n```")
        assert fence.body == ""
        assert fence.body_span.start == fence.body_span.end
        assert fence.body_span.start_line == 3

    def test_crlf_line_endings(self) -> None:
        heading, fence = _scan("# build\r\n```sh\r\necho\r\n```\r\n")
        assert heading.text == "build"
        assert fence.body == "echo"


class TestFenceContent:
    def test_heading_inside_fence_is_body(self) -> None:
        (_, fence) = _scan("# t\n```bash\n# not a heading\n```")
        assert fence.body == "# not a heading"

    def test_tilde_fence(self) -> None:
        (_, fence) = _scan("# t\n~~~python\nx = 1\n~~~")
        assert fence.interpreter == "python"
        assert fence.body == "x = 1"

    def test_shorter_or_different_marker_does_not_close(self) -> None:
        (_, fence) = _scan("# t\n````sh\n```\n~~~~\n````")
        assert fence.body == "```\n~~~~"

    def test_backtick_in_info_string_is_not_a_fence(self) -> None:
        (block,) = _scan("```a`b")
        assert isinstance(block, Text)


class TestUnterminatedFence:
    def test_raises_at_opening_line(self) -> None:
        with pytest.raises(ScanError) as exc_info:
            _scan("# t\n\n```bash\necho\n")
        err = exc_info.value
        assert err.code == RuleCode.UNTERMINATED_CODE_FENCE
        assert err.span.start_line == 3
        assert "```" in err.suggested_fix

    def test_tilde_closer_does_not_end_backtick_fence(self) -> None:
        with pytest.raises(ScanError):
            _scan("# t\n```sh\necho\n~~~\n")

    def test_blocks_before_error_are_yielded(self) -> None:
        blocks = scan_blocks("# t\n```sh\necho\n")
        first = next(blocks)
        assert isinstance(first, Heading)
        with pytest.raises(ScanError):
            next(blocks)
