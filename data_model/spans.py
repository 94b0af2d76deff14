"""
data_model/spans.py — pozycje w tekście maskfile.

Span      — niezmienny zakres: offsety bajtowe (UTF-8) + linia/kolumna.
SourceMap — indeks linii dokumentu; zamienia offsety znakowe na Span
            i (linia, kolumna) z powrotem na offset znakowy.

Konwencje:
  - linie i kolumny liczone od 1
  - kolumna liczy wartości skalarne Unicode (jeden znak str = jedna kolumna)
  - pozycje końcowe są wyłączne (pierwsza pozycja za zakresem)
  - linie dzielimy wyłącznie po '\\n'
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Span:
    """
    Zakres w dokumencie źródłowym.

    - start, end:             offsety bajtowe w UTF-8 (end wyłączny)
    - start_line, end_line:   numery linii (1-based)
    - start_column, end_column: kolumny (1-based, end wyłączny)
    """

    start: int
    end: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def cover(self, other: Span) -> Span:
        """Zwraca najmniejszy span obejmujący oba zakresy."""
        first = self if self.start <= other.start else other
        last = self if self.end >= other.end else other
        return Span(
            start=first.start,
            end=last.end,
            start_line=first.start_line,
            start_column=first.start_column,
            end_line=last.end_line,
            end_column=last.end_column,
        )


# ---------------------------------------------------------------------------
# SourceMap
# ---------------------------------------------------------------------------

class SourceMap:
    """
    Indeks linii dokumentu do szybkiego liczenia spanów.

    Użycie:
        source = SourceMap(text)
        span   = source.span(10, 25)          # offsety znakowe
        offset = source.offset_of(3, 5)       # linia 3, kolumna 5
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._line_starts: list[int] = [0]
        self._byte_starts: list[int] = [0]

        byte_pos = 0
        char_pos = 0
        for line in text.split("\n")[:-1]:
            char_pos += len(line) + 1
            byte_pos += len(line.encode("utf-8")) + 1
            self._line_starts.append(char_pos)
            self._byte_starts.append(byte_pos)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_start(self, line: int) -> int:
        """Offset znakowy początku linii (1-based)."""
        return self._line_starts[line - 1]

    def position(self, offset: int) -> tuple[int, int, int]:
        """Zwraca (offset bajtowy, linia, kolumna) dla offsetu znakowego."""
        offset = max(0, min(offset, len(self.text)))
        idx = bisect.bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[idx]
        byte = self._byte_starts[idx] + len(self.text[line_start:offset].encode("utf-8"))
        return byte, idx + 1, offset - line_start + 1

    def span(self, start: int, end: int) -> Span:
        """Buduje Span z zakresu offsetów znakowych [start, end)."""
        b_start, l_start, c_start = self.position(start)
        b_end, l_end, c_end = self.position(end)
        return Span(
            start=b_start,
            end=b_end,
            start_line=l_start,
            start_column=c_start,
            end_line=l_end,
            end_column=c_end,
        )

    def offset_of(self, line: int, column: int) -> int:
        """Offset znakowy dla pary (linia, kolumna)."""
        return self._line_starts[line - 1] + column - 1
