"""
validator/pipeline.py — pełny przebieg: tekst → drzewo → diagnostyki.

parse_document(text)          -> ParseResult   (ScanError / BuildError)
lint_document(text, config)   -> LintReport    (nigdy nie rzuca błędów strukturalnych)

Błąd strukturalny (niezamknięty blok kodu, blok kodu przed nagłówkiem)
przerywa przetwarzanie dokumentu: raport nie ma drzewa i zawiera jedną
fatalną diagnostykę. Wszystkie pozostałe problemy są diagnostykami.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from data_model import Finding, SourceMap, TaskNode
from maskfile import MaskfileError, build_tree, extract_metadata, scan_blocks

from .config import LintConfig
from .engine import RuleEngine
from .types import LintReport, Rule

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ParseResult:
    root: TaskNode
    source: SourceMap
    findings: list[Finding] = field(default_factory=list)


def parse_document(text: str) -> ParseResult:
    """
    Parsuje maskfile do drzewa zadań.

    Zwraca drzewo oraz znaleziska z ekstrakcji metadanych i budowy drzewa.

    Raises:
        ScanError, BuildError: gdy dokumentu nie da się zamienić w drzewo.
    """
    extraction = extract_metadata(scan_blocks(text))
    built = build_tree(extraction.blocks)
    return ParseResult(
        root=built.root,
        source=SourceMap(text),
        findings=[*extraction.findings, *built.findings],
    )


def lint_document(
    text: str,
    config: LintConfig | None = None,
    *,
    rules: Sequence[Rule] | None = None,
    workers: int = 1,
) -> LintReport:
    """
    Lintuje jeden dokument.

    Args:
        text:    treść maskfile
        config:  konfiguracja reguł (domyślna gdy None)
        rules:   zestaw reguł (domyślnie BUILTIN_RULES)
        workers: liczba wątków do ewaluacji reguł
    """
    try:
        parsed = parse_document(text)
    except MaskfileError as exc:
        logger.info("błąd strukturalny: %s", exc)
        return LintReport(tree=None, diagnostics=[exc.to_diagnostic()])

    engine = RuleEngine(rules=rules, config=config, workers=workers)
    diagnostics = engine.run(parsed.root, parsed.findings, parsed.source)
    return LintReport(tree=parsed.root, diagnostics=diagnostics)
