"""
data_model/blocks.py — bloki dokumentu produkowane przez skaner.

Heading   — nagłówek '#'..'######' (depth 1..6)
CodeFence — blok kodu ograniczony płotkiem (``` lub ~~~)
Text      — ciągły akapit/lista niepustych linii

Bloki są tworzone raz przez maskfile.scanner i dalej tylko czytane.
"""

from __future__ import annotations

from dataclasses import dataclass

from .spans import Span


@dataclass(frozen=True, slots=True)
class Heading:
    depth: int   # 1..6
    text: str    # treść nagłówka bez znaczników '#'
    span: Span


@dataclass(frozen=True, slots=True)
class CodeFence:
    """
    Blok kodu.

    - interpreter: pierwsze słowo info stringa po otwierającym płotku
                   (None gdy brak), np. "bash"
    - body:        treść między płotkami, linie złączone '\\n'
    - span:        od otwierającego do zamykającego płotka włącznie
    - body_span:   sama treść (pusty zakres gdy blok jest pusty)
    """
    interpreter: str | None
    body: str
    span: Span
    body_span: Span


@dataclass(frozen=True, slots=True)
class Text:
    content: str                   # linie złączone '\n', bez modyfikacji
    span: Span
    line_spans: tuple[Span, ...]   # span każdej linii content


type Block = Heading | CodeFence | Text
