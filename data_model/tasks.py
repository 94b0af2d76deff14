"""
data_model/tasks.py — drzewo zadań maskfile.

Parameter — zadeklarowany parametr zadania
TaskNode  — zadanie (węzeł drzewa); korzeń ma depth=0 i nie jest zadaniem

Niezmienniki drzewa:
  - child.depth > parent.depth
  - dokładnie jeden syntetyczny korzeń (depth 0)
  - węzeł bez body i bez dzieci to "puste zadanie" (zgłaszane przez regułę)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .spans import Span


@dataclass(frozen=True, slots=True)
class Parameter:
    """
    Parametr zadania.

    - name:        nazwa, wzorzec [A-Za-z_][A-Za-z0-9_-]*
    - description: opis po ':' (opcjonalnie)
    - required:    True gdy oznaczony '*' lub pozycyjny bez '?'
    - default:     wartość po '=' (opcjonalnie)
    - span:        linia deklaracji lub grupa w nagłówku
    """
    name: str
    span: Span
    description: str | None = None
    required: bool = False
    default: str | None = None


@dataclass(slots=True)
class TaskNode:
    """
    Węzeł drzewa zadań.

    span obejmuje nagłówek i własną treść zadania (bez potomków);
    heading_span — tylko linię nagłówka; fence_span — cały blok kodu
    z płotkami; body_span — treść bloku kodu.
    """
    name: str
    depth: int
    span: Span
    heading_span: Span
    description: str | None = None
    parameters: list[Parameter] = field(default_factory=list)
    interpreter: str | None = None
    body: str | None = None
    fence_span: Span | None = None
    body_span: Span | None = None
    children: list[TaskNode] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.depth == 0

    def walk(self) -> Iterator[tuple[TaskNode, tuple[TaskNode, ...]]]:
        """
        Przechodzi poddrzewo w kolejności dokumentu (pre-order).

        Zwraca pary (węzeł, przodkowie od korzenia); sam korzeń jest pomijany.
        """
        stack: list[tuple[TaskNode, tuple[TaskNode, ...]]] = [
            (child, (self,)) for child in reversed(self.children)
        ]
        while stack:
            node, ancestors = stack.pop()
            yield node, ancestors
            path = (*ancestors, node)
            stack.extend((child, path) for child in reversed(node.children))

    def full_name(self, ancestors: tuple[TaskNode, ...]) -> str:
        """Pełna nazwa komendy, np. "db migrate" (bez korzenia)."""
        names = [a.name for a in ancestors if not a.is_root]
        names.append(self.name)
        return " ".join(names)
