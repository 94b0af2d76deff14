"""
maskfile/scanner.py — podział tekstu maskfile na bloki.

Architektura:
  text → linie (podział po '\\n', '\\r' na końcu linii odcinany)
  → Heading | CodeFence | Text (puste linie rozdzielają bloki, nie są emitowane)

Kluczowe funkcje publiczne:
  scan_blocks(text) -> Iterator[Block]   (leniwy; kolejne wywołanie = nowy skan)

Błędy:
  ScanError(UNTERMINATED_CODE_FENCE) — płotek otwarty bez zamknięcia do końca
  dokumentu; span wskazuje linię otwierającą.
"""

from __future__ import annotations

import logging
from typing import Iterator

from data_model import Block, CodeFence, Heading, SourceMap, Text
from data_model.codes import RuleCode

from .errors import ScanError
from .patterns import FENCE_CLOSE_RE, FENCE_OPEN_RE, HEADING_CLOSING_RE, HEADING_RE

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Typy wewnętrzne
# ---------------------------------------------------------------------------

class _OpenFence:
    __slots__ = ("char", "length", "interpreter", "start", "open_end", "lines")

    def __init__(self, char: str, length: int, interpreter: str | None, start: int, open_end: int) -> None:
        self.char = char
        self.length = length
        self.interpreter = interpreter
        self.start = start          # offset znakowy linii otwierającej
        self.open_end = open_end    # koniec linii otwierającej
        self.lines: list[tuple[int, str]] = []  # (offset, treść) linii ciała

    def closes(self, line: str) -> bool:
        m = FENCE_CLOSE_RE.match(line)
        if not m:
            return False
        fence = m.group("fence")
        return fence[0] == self.char and len(fence) >= self.length

    def block(self, source: SourceMap, close_start: int, close_end: int) -> CodeFence:
        if self.lines:
            first_offset = self.lines[0][0]
            last_offset, last_line = self.lines[-1]
            body_span = source.span(first_offset, last_offset + len(last_line))
        else:
            body_span = source.span(close_start, close_start)
        return CodeFence(
            interpreter=self.interpreter,
            body="\n".join(line for _, line in self.lines),
            span=source.span(self.start, close_end),
            body_span=body_span,
        )


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def scan_blocks(text: str) -> Iterator[Block]:
    """
    Dzieli dokument na bloki w kolejności dokumentu.

    Args:
        text: Pełna treść maskfile.

    Raises:
        ScanError: gdy blok kodu nie jest zamknięty przed końcem dokumentu
                   (zgłaszany po wyemitowaniu wcześniejszych bloków).
    """
    source = SourceMap(text)
    pending: list[tuple[int, str]] = []
    fence: _OpenFence | None = None

    offset = 0
    for raw in text.split("\n"):
        line = raw[:-1] if raw.endswith("\r") else raw
        start = offset
        offset += len(raw) + 1

        # Wewnątrz bloku kodu liczy się tylko płotek zamykający
        if fence is not None:
            if fence.closes(line):
                yield fence.block(source, start, start + len(line))
                fence = None
            else:
                fence.lines.append((start, line))
            continue

        if not line.strip():
            if pending:
                yield _text_block(source, pending)
                pending = []
            continue

        heading = HEADING_RE.match(line)
        if heading:
            if pending:
                yield _text_block(source, pending)
                pending = []
            yield Heading(
                depth=len(heading.group("marks")),
                text=HEADING_CLOSING_RE.sub("", heading.group("text")).strip(),
                span=source.span(start, start + len(line)),
            )
            continue

        opening = _match_fence_open(line)
        if opening is not None:
            if pending:
                yield _text_block(source, pending)
                pending = []
            char, length, interpreter = opening
            fence = _OpenFence(char, length, interpreter, start, start + len(line))
            continue

        pending.append((start, line))

    if fence is not None:
        span = source.span(fence.start, fence.open_end)
        logger.debug("niezamknięty blok kodu od linii %d", span.start_line)
        raise ScanError(
            RuleCode.UNTERMINATED_CODE_FENCE,
            span,
            "Blok kodu otwarty w tej linii nie jest zamknięty przed końcem dokumentu.",
            suggested_fix=f"Dodaj linię zamykającą '{fence.char * fence.length}'.",
        )

    if pending:
        yield _text_block(source, pending)


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _match_fence_open(line: str) -> tuple[str, int, str | None] | None:
    """Zwraca (znak, długość, interpreter) dla linii otwierającej blok kodu."""
    m = FENCE_OPEN_RE.match(line)
    if not m:
        return None
    fence = m.group("fence")
    info = m.group("info")
    # Info string płotka z '`' nie może zawierać '`' (to kod inline)
    if fence[0] == "`" and "`" in info:
        return None
    words = info.split()
    return fence[0], len(fence), (words[0] if words else None)


def _text_block(source: SourceMap, lines: list[tuple[int, str]]) -> Text:
    line_spans = tuple(source.span(off, off + len(line)) for off, line in lines)
    return Text(
        content="\n".join(line for _, line in lines),
        span=line_spans[0].cover(line_spans[-1]),
        line_spans=line_spans,
    )
