"""
validator/rules.py — wbudowane reguły lintera.

Każda reguła to mała wartość (NodeRule / TreeRule) z kodem, domyślnym
poziomem i funkcją zwracającą znaleziska. Reguły nie modyfikują drzewa
i nie współdzielą stanu; kolejność w BUILTIN_RULES nie wpływa na wynik.

  duplicate-task-name            error    dwa zadania-rodzeństwo o tej samej nazwie
  missing-task-name              error    nagłówek bez nazwy
  empty-task                     warning  brak body i brak podzadań
  missing-description            info     body bez opisu (domyślnie wyłączona)
  unknown-interpreter            warning  interpreter spoza listy dozwolonych
  missing-interpreter            warning  blok kodu bez interpretera
  duplicate-parameter-name       error    powtórzona nazwa parametru
  undeclared-parameter-reference error    ${nazwa} bez deklaracji parametru
  unused-parameter               warning  parametr nieużywany w body
"""

from __future__ import annotations

from typing import Iterator

from data_model import Finding, Severity, Span, TaskNode
from data_model.codes import RuleCode
from maskfile.builder import duplicate_task_finding

from .references import find_placeholders, reference_span, references_parameter
from .types import NodeRule, RuleContext, TreeRule


# ---------------------------------------------------------------------------
# Drzewo zadań
# ---------------------------------------------------------------------------

def _duplicate_task_names(root: TaskNode, context: RuleContext) -> Iterator[Finding]:
    parents = [root, *(node for node, _ in root.walk())]
    for parent in parents:
        seen: dict[str, TaskNode] = {}
        for child in parent.children:
            if not child.name:
                continue
            first = seen.setdefault(child.name, child)
            if first is not child:
                yield duplicate_task_finding(
                    child.name, child.heading_span, first.heading_span.start_line,
                )


def _missing_task_name(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    if not node.name.strip():
        yield Finding(
            rule_code=RuleCode.MISSING_TASK_NAME,
            message="Nagłówek nie zawiera nazwy zadania.",
            span=node.heading_span,
            suggested_fix="Dopisz nazwę zadania po znakach '#'.",
        )


def _empty_task(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    if node.body is None and not node.children:
        yield Finding(
            rule_code=RuleCode.EMPTY_TASK,
            message=f"Zadanie '{node.name}' nie ma bloku kodu ani podzadań.",
            span=node.heading_span,
            suggested_fix="Dodaj blok kodu z treścią zadania lub usuń nagłówek.",
        )


def _missing_description(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    if node.body is not None and not node.description:
        yield Finding(
            rule_code=RuleCode.MISSING_DESCRIPTION,
            message=f"Zadanie '{node.name}' nie ma opisu.",
            span=node.heading_span,
            suggested_fix="Dodaj akapit z opisem bezpośrednio pod nagłówkiem.",
        )


# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------

def _unknown_interpreter(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    interpreter = node.interpreter
    if interpreter is None or context.config.allows_interpreter(interpreter):
        return
    allowed = ", ".join(sorted(context.config.allowed_interpreters))
    yield Finding(
        rule_code=RuleCode.UNKNOWN_INTERPRETER,
        message=f"Interpreter '{interpreter}' w zadaniu '{node.name}' nie jest na liście dozwolonych.",
        span=_fence_span(node),
        suggested_fix=f"Użyj jednego z: {allowed}.",
    )


def _missing_interpreter(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    if node.body is not None and node.interpreter is None:
        yield Finding(
            rule_code=RuleCode.MISSING_INTERPRETER,
            message=f"Blok kodu zadania '{node.name}' nie deklaruje interpretera.",
            span=_fence_span(node),
            suggested_fix="Dopisz interpreter po otwierającym płotku, np. ```bash.",
        )


# ---------------------------------------------------------------------------
# Parametry
# ---------------------------------------------------------------------------

def _duplicate_parameter_names(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    seen: set[str] = set()
    for param in node.parameters:
        if param.name in seen:
            yield Finding(
                rule_code=RuleCode.DUPLICATE_PARAMETER_NAME,
                message=f"Parametr '{param.name}' jest zadeklarowany więcej niż raz w zadaniu '{node.name}'.",
                span=param.span,
                suggested_fix="Usuń powtórzoną deklarację lub zmień nazwę parametru.",
            )
        seen.add(param.name)


def _undeclared_parameter_reference(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    if node.body is None:
        return
    declared = {p.name for p in node.parameters}
    reported: set[str] = set()
    for ref in find_placeholders(node.body, context.config.placeholder_re):
        if ref.name in declared or ref.name in context.config.known_variables:
            continue
        if ref.name in reported:
            continue
        reported.add(ref.name)
        yield Finding(
            rule_code=RuleCode.UNDECLARED_PARAMETER_REFERENCE,
            message=f"Zadanie '{node.name}' odwołuje się do niezadeklarowanego parametru '{ref.name}'.",
            span=reference_span(node, ref, context.source),
            suggested_fix=f"Dodaj deklarację '- {ref.name}: opis' pod nagłówkiem zadania.",
        )


def _unused_parameter(node: TaskNode, ancestors: tuple[TaskNode, ...], context: RuleContext) -> Iterator[Finding]:
    body = node.body or ""
    checked: set[str] = set()
    for param in node.parameters:
        if param.name in checked:
            continue
        checked.add(param.name)
        if references_parameter(body, param.name, node.interpreter, context.config.placeholder_re):
            continue
        yield Finding(
            rule_code=RuleCode.UNUSED_PARAMETER,
            message=f"Parametr '{param.name}' nie jest używany w zadaniu '{node.name}'.",
            span=param.span,
            suggested_fix=f"Użyj ${{{param.name}}} w bloku kodu lub usuń deklarację.",
        )


# ---------------------------------------------------------------------------
# Funkcje pomocnicze
# ---------------------------------------------------------------------------

def _fence_span(node: TaskNode) -> Span:
    return node.fence_span or node.heading_span


# ---------------------------------------------------------------------------
# Rejestr
# ---------------------------------------------------------------------------

BUILTIN_RULES: list[NodeRule | TreeRule] = [
    TreeRule(RuleCode.DUPLICATE_TASK_NAME, Severity.ERROR, _duplicate_task_names,
             "dwa zadania-rodzeństwo o tej samej nazwie"),
    NodeRule(RuleCode.MISSING_TASK_NAME, Severity.ERROR, _missing_task_name,
             "nagłówek bez nazwy zadania"),
    NodeRule(RuleCode.EMPTY_TASK, Severity.WARNING, _empty_task,
             "zadanie bez bloku kodu i bez podzadań"),
    NodeRule(RuleCode.MISSING_DESCRIPTION, Severity.INFO, _missing_description,
             "zadanie z blokiem kodu, ale bez opisu"),
    NodeRule(RuleCode.UNKNOWN_INTERPRETER, Severity.WARNING, _unknown_interpreter,
             "interpreter spoza listy dozwolonych"),
    NodeRule(RuleCode.MISSING_INTERPRETER, Severity.WARNING, _missing_interpreter,
             "blok kodu bez interpretera"),
    NodeRule(RuleCode.DUPLICATE_PARAMETER_NAME, Severity.ERROR, _duplicate_parameter_names,
             "powtórzona nazwa parametru"),
    NodeRule(RuleCode.UNDECLARED_PARAMETER_REFERENCE, Severity.ERROR, _undeclared_parameter_reference,
             "odwołanie ${nazwa} do niezadeklarowanego parametru"),
    NodeRule(RuleCode.UNUSED_PARAMETER, Severity.WARNING, _unused_parameter,
             "zadeklarowany parametr nieużywany w bloku kodu"),
]
