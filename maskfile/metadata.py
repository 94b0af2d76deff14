"""
maskfile/metadata.py — ekstrakcja metadanych zadań z nagłówków i akapitów.

extract_metadata(blocks) -> Extraction

Każdy Heading zamieniany jest na TaskHeading:
  - name         — tekst nagłówka bez argumentów pozycyjnych, trim
  - parameters   — argumenty z nagłówka "(env) (region?)" oraz deklaracje
                   z listy bezpośrednio pod nagłówkiem
  - description  — pierwszy akapit pod nagłówkiem, który nie jest listą deklaracji

Bloki Text skonsumowane przez nagłówek znikają z sekwencji; pozostałe
bloki przechodzą bez zmian. Ekstrakcja nigdy nie kończy się błędem:
niepoprawna deklaracja daje Finding INVALID_PARAMETER_DECLARATION.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from data_model import Block, CodeFence, Finding, Heading, Parameter, Span, Text
from data_model.codes import RuleCode

from .patterns import (
    DECLARATION_ATTEMPT_RE,
    DECLARATION_RE,
    HEADING_ARG_RE,
    HEADING_ARGS_RE,
    LIST_ITEM_RE,
    NAME_RE,
)


# ---------------------------------------------------------------------------
# Typy
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TaskHeading:
    """
    Nagłówek z dołączonymi metadanymi.

    span obejmuje nagłówek i skonsumowane akapity.
    """
    heading: Heading
    name: str
    description: str | None
    parameters: tuple[Parameter, ...]
    span: Span

    @property
    def depth(self) -> int:
        return self.heading.depth


type AnnotatedBlock = TaskHeading | CodeFence | Text


@dataclass(slots=True)
class Extraction:
    blocks: list[AnnotatedBlock] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def extract_metadata(blocks: Iterable[Block]) -> Extraction:
    """Dołącza metadane do nagłówków; zwraca bloki z adnotacjami + znaleziska."""
    result = Extraction()
    items = list(blocks)

    i = 0
    while i < len(items):
        block = items[i]
        i += 1
        if not isinstance(block, Heading):
            result.blocks.append(block)
            continue

        texts: list[Text] = []
        while i < len(items) and isinstance(items[i], Text):
            texts.append(items[i])  # type: ignore[arg-type]
            i += 1
        result.blocks.append(annotate_heading(block, texts, result.findings))

    return result


def annotate_heading(
    heading: Heading,
    texts: Iterable[Text] = (),
    findings: list[Finding] | None = None,
) -> TaskHeading:
    """
    Buduje TaskHeading z nagłówka i następujących po nim akapitów.

    Znaleziska (niepoprawne deklaracje) dopisywane są do `findings`.
    """
    if findings is None:
        findings = []

    name, parameters = parse_heading(heading, findings)
    description: str | None = None
    span = heading.span

    for text in texts:
        span = span.cover(text.span)
        if is_declaration_block(text):
            parameters.extend(parse_declarations(text, findings))
        elif description is None:
            description = _paragraph(text)

    return TaskHeading(
        heading=heading,
        name=name,
        description=description,
        parameters=tuple(parameters),
        span=span,
    )


def parse_heading(heading: Heading, findings: list[Finding]) -> tuple[str, list[Parameter]]:
    """Rozdziela tekst nagłówka na nazwę i argumenty pozycyjne."""
    m = HEADING_ARGS_RE.match(heading.text)
    if m is None:
        return heading.text.strip(), []

    parameters: list[Parameter] = []
    for arg_match in HEADING_ARG_RE.finditer(m.group("args")):
        raw = arg_match.group("arg").strip()
        optional = raw.endswith("?")
        arg_name = raw[:-1].strip() if optional else raw
        if not NAME_RE.match(arg_name):
            findings.append(_invalid_declaration(f"({raw})", heading.span))
            continue
        parameters.append(Parameter(
            name=arg_name,
            span=heading.span,
            required=not optional,
        ))
    return m.group("name").strip(), parameters


def is_declaration_block(text: Text) -> bool:
    """
    Czy akapit jest listą deklaracji parametrów?

    Tak, gdy każda linia jest elementem listy ('-' lub '+') i każdy element
    wygląda na próbę deklaracji (pierwszy token kończy ':', '=' lub koniec linii).
    """
    for line in text.content.split("\n"):
        item = LIST_ITEM_RE.match(line)
        if item is None or not DECLARATION_ATTEMPT_RE.match(item.group("item")):
            return False
    return True


def parse_declarations(text: Text, findings: list[Finding]) -> list[Parameter]:
    """Parsuje linie listy deklaracji; niepoprawne linie → Finding."""
    parameters: list[Parameter] = []
    for line, span in zip(text.content.split("\n"), text.line_spans):
        item_match = LIST_ITEM_RE.match(line)
        if item_match is None:
            continue
        item = item_match.group("item")
        m = DECLARATION_RE.match(item)
        if m is None:
            findings.append(_invalid_declaration(item, span))
            continue
        default = m.group("default")
        description = m.group("description")
        parameters.append(Parameter(
            name=m.group("name"),
            span=span,
            description=description or None,
            required=m.group("required") is not None,
            default=default.strip() if default is not None else None,
        ))
    return parameters


# ---------------------------------------------------------------------------
# Funkcje pomocnicze
# ---------------------------------------------------------------------------

def _paragraph(text: Text) -> str:
    return "\n".join(line.strip() for line in text.content.split("\n"))


def _invalid_declaration(item: str, span: Span) -> Finding:
    return Finding(
        rule_code=RuleCode.INVALID_PARAMETER_DECLARATION,
        message=(
            f"Deklaracja parametru '{item}' ma niepoprawną nazwę "
            r"(wymagany wzorzec [A-Za-z_][A-Za-z0-9_-]*)."
        ),
        span=span,
        suggested_fix="Użyj nazwy zaczynającej się od litery lub '_', np. 'target'.",
    )
