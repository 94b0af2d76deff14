"""
validator/types.py — reguły, kontekst reguł i raport lintowania.

Rule        — protokół: code + severity + evaluate(root, context) -> Findings
NodeRule    — reguła odwiedzająca każdy węzeł (z listą przodków)
TreeRule    — reguła z własnym przejściem drzewa (informacje między węzłami)
RuleContext — konfiguracja + opcjonalna mapa źródła (do liczenia spanów)
LintReport  — wynik lintowania: drzewo (None przy błędzie fatalnym) i diagnostyki
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol

from data_model import Diagnostic, Finding, Severity, SourceMap, TaskNode
from data_model.codes import RuleCode

from .config import LintConfig

# Poziomy znalezisk przenoszonych z ekstrakcji i budowy drzewa
CARRIED_SEVERITY: dict[str, Severity] = {
    RuleCode.INVALID_PARAMETER_DECLARATION: Severity.WARNING,
    RuleCode.MULTIPLE_BODIES:               Severity.WARNING,
    RuleCode.DUPLICATE_TASK_NAME:           Severity.ERROR,
}


@dataclass(frozen=True, slots=True)
class RuleContext:
    config: LintConfig
    source: SourceMap | None = None


class Rule(Protocol):
    code: str
    severity: Severity

    def evaluate(self, root: TaskNode, context: RuleContext) -> Iterable[Finding]: ...


type NodeVisitor = Callable[[TaskNode, tuple[TaskNode, ...], RuleContext], Iterable[Finding]]
type TreeCheck = Callable[[TaskNode, RuleContext], Iterable[Finding]]


@dataclass(frozen=True, slots=True)
class NodeRule:
    code: RuleCode
    severity: Severity
    visit: NodeVisitor
    summary: str = ""

    def evaluate(self, root: TaskNode, context: RuleContext) -> Iterable[Finding]:
        for node, ancestors in root.walk():
            yield from self.visit(node, ancestors, context)


@dataclass(frozen=True, slots=True)
class TreeRule:
    code: RuleCode
    severity: Severity
    check: TreeCheck
    summary: str = ""

    def evaluate(self, root: TaskNode, context: RuleContext) -> Iterable[Finding]:
        return self.check(root, context)


@dataclass(slots=True)
class LintReport:
    """
    Wynik lintowania jednego dokumentu.

    - tree:        korzeń drzewa zadań (None gdy błąd strukturalny)
    - diagnostics: posortowane diagnostyki
    """

    tree: TaskNode | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def fatal(self) -> bool:
        return self.tree is None

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def records(self, file: str | None = None) -> list[dict[str, Any]]:
        return [d.to_record(file) for d in self.diagnostics]
