"""
maskfile/builder.py — budowa drzewa zadań z sekwencji bloków.

build_tree(blocks) -> BuildResult(root, findings)

Algorytm: jawny stos otwartych węzłów uporządkowany wg depth.
  - TaskHeading(d): zdejmij ze stosu węzły o depth >= d, dodaj nowy węzeł
    jako dziecko wierzchołka, połóż go na stosie
  - CodeFence:      przypnij interpreter i body do wierzchołka stosu;
                    drugie body w tym samym zadaniu → MULTIPLE_BODIES
  - Text:           poszerza span bieżącego zadania

Kolizje nazw rodzeństwa wykrywane są w tym samym przebiegu (zbiór nazw
na rodzica) i przenoszone jako Finding DUPLICATE_TASK_NAME — drzewo
zawsze się buduje.

Błędy:
  BuildError(ORPHAN_CODE_FENCE) — blok kodu przed pierwszym nagłówkiem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from data_model import CodeFence, Finding, Heading, Span, TaskNode, Text
from data_model.codes import RuleCode

from .errors import BuildError
from .metadata import AnnotatedBlock, TaskHeading, annotate_heading

logger = logging.getLogger(__name__)

ROOT_SPAN = Span(start=0, end=0, start_line=1, start_column=1, end_line=1, end_column=1)
ROOT_NAME = ""


@dataclass(slots=True)
class BuildResult:
    root: TaskNode
    findings: list[Finding] = field(default_factory=list)


class _Frame:
    __slots__ = ("node", "child_names")

    def __init__(self, node: TaskNode) -> None:
        self.node = node
        self.child_names: dict[str, TaskNode] = {}


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def new_root() -> TaskNode:
    """Syntetyczny korzeń drzewa (depth 0, nie jest zadaniem)."""
    return TaskNode(name=ROOT_NAME, depth=0, span=ROOT_SPAN, heading_span=ROOT_SPAN)


def build_tree(blocks: Iterable[AnnotatedBlock | Heading]) -> BuildResult:
    """
    Buduje drzewo zadań.

    Args:
        blocks: Bloki po ekstrakcji metadanych; surowe Heading są
                dopuszczalne (dostają metadane bez akapitów).

    Raises:
        BuildError: gdy blok kodu pojawia się przed jakimkolwiek nagłówkiem.
    """
    result = BuildResult(root=new_root())
    stack: list[_Frame] = [_Frame(result.root)]

    for block in blocks:
        if isinstance(block, Heading):
            block = annotate_heading(block, findings=result.findings)

        match block:
            case TaskHeading():
                while stack[-1].node.depth >= block.depth:
                    stack.pop()
                node = _open_task(stack[-1], block, result.findings)
                stack.append(_Frame(node))

            case CodeFence():
                if len(stack) == 1:
                    raise BuildError(
                        RuleCode.ORPHAN_CODE_FENCE,
                        block.span,
                        "Blok kodu nie należy do żadnego zadania (brak nagłówka przed nim).",
                        suggested_fix="Dodaj nagłówek zadania nad blokiem kodu lub usuń blok.",
                    )
                _attach_body(stack[-1].node, block, result.findings)

            case Text():
                if len(stack) > 1:
                    node = stack[-1].node
                    node.span = node.span.cover(block.span)

    logger.debug(
        "drzewo zbudowane: %d zadań najwyższego poziomu, %d znalezisk",
        len(result.root.children),
        len(result.findings),
    )
    return result


def duplicate_task_finding(name: str, span: Span, first_line: int) -> Finding:
    """Finding dla powtórzonej nazwy zadania (wspólny z regułą duplicate-task-name)."""
    return Finding(
        rule_code=RuleCode.DUPLICATE_TASK_NAME,
        message=(
            f"Zadanie '{name}' jest już zdefiniowane na tym poziomie "
            f"(linia {first_line})."
        ),
        span=span,
        suggested_fix="Zmień nazwę jednego z zadań lub połącz ich treść.",
    )


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _open_task(parent: _Frame, heading: TaskHeading, findings: list[Finding]) -> TaskNode:
    node = TaskNode(
        name=heading.name,
        depth=heading.depth,
        span=heading.span,
        heading_span=heading.heading.span,
        description=heading.description,
        parameters=list(heading.parameters),
    )
    parent.node.children.append(node)

    if node.name:
        first = parent.child_names.get(node.name)
        if first is None:
            parent.child_names[node.name] = node
        else:
            findings.append(duplicate_task_finding(
                node.name, node.heading_span, first.heading_span.start_line,
            ))
    return node


def _attach_body(node: TaskNode, fence: CodeFence, findings: list[Finding]) -> None:
    node.span = node.span.cover(fence.span)
    if node.body is None:
        node.interpreter = fence.interpreter
        node.body = fence.body
        node.fence_span = fence.span
        node.body_span = fence.body_span
        return

    first = node.fence_span or node.heading_span
    findings.append(Finding(
        rule_code=RuleCode.MULTIPLE_BODIES,
        message=(
            f"Zadanie '{node.name}' ma więcej niż jeden blok kodu; "
            f"używany jest pierwszy (linia {first.start_line})."
        ),
        span=fence.span,
        suggested_fix="Połącz bloki kodu w jeden lub przenieś ten blok do osobnego zadania.",
    ))
