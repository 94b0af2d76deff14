"""
validator — silnik reguł masklint.

Interfejs publiczny:
    lint_document   — tekst → LintReport (drzewo + posortowane diagnostyki)
    parse_document  — tekst → ParseResult (drzewo + znaleziska z budowy)
    RuleEngine      — uruchamia reguły na gotowym drzewie
    LintConfig      — konfiguracja reguł (JSON, walidowany jsonschema)
    BUILTIN_RULES   — wbudowane reguły
    NodeRule, TreeRule, Rule, RuleContext, LintReport — typy

Typowe użycie:
    from validator import LintConfig, lint_document

    config = LintConfig.from_file("masklint.json")
    report = lint_document(Path("maskfile.md").read_text(), config)
    for d in report.diagnostics:
        print(d.span.start_line, d.rule_code, d.message)
"""

from .config import ConfigError, LintConfig, RuleSettings
from .types import LintReport, NodeRule, Rule, RuleContext, TreeRule
from .rules import BUILTIN_RULES
from .engine import RuleEngine
from .pipeline import ParseResult, lint_document, parse_document

__all__ = [
    "ConfigError",
    "LintConfig",
    "RuleSettings",
    "LintReport",
    "NodeRule",
    "Rule",
    "RuleContext",
    "TreeRule",
    "BUILTIN_RULES",
    "RuleEngine",
    "ParseResult",
    "lint_document",
    "parse_document",
]
