"""
data_model/diagnostics.py — model diagnostyk lintera.

Severity   — poziom: error | warning | info
Finding    — kandydat na diagnostykę (bez poziomu), produkowany przez
             ekstraktor metadanych, budowniczego drzewa i reguły
Diagnostic — finalny wpis raportu; porządek całkowity wg
             (start_line, start_column, rule_code), dalsze pola rozstrzygają remisy
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .spans import Span


class Severity(StrEnum):
    ERROR   = "error"
    WARNING = "warning"
    INFO    = "info"


@dataclass(frozen=True, slots=True)
class Finding:
    rule_code: str
    message: str
    span: Span
    suggested_fix: str | None = None

    def with_severity(self, severity: Severity) -> Diagnostic:
        return Diagnostic(
            severity=severity,
            rule_code=self.rule_code,
            message=self.message,
            span=self.span,
            suggested_fix=self.suggested_fix,
        )


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    Pojedyncza diagnostyka.

    - severity:      poziom (Severity)
    - rule_code:     kod reguły, np. "duplicate-task-name"
    - message:       czytelny opis problemu
    - span:          miejsce w maskfile
    - suggested_fix: krótka instrukcja naprawy (opcjonalnie)
    """

    severity: Severity
    rule_code: str
    message: str
    span: Span
    suggested_fix: str | None = None

    @property
    def sort_key(self) -> tuple:
        s = self.span
        return (
            s.start_line,
            s.start_column,
            self.rule_code,
            s.end_line,
            s.end_column,
            self.message,
            self.severity.value,
            self.suggested_fix or "",
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return self.sort_key < other.sort_key

    def to_record(self, file: str | None = None) -> dict[str, Any]:
        """Rekord wyjściowy: {severity, rule_code, message, file, line, column, ...}."""
        return {
            "severity": self.severity.value,
            "rule_code": self.rule_code,
            "message": self.message,
            "file": file,
            "line": self.span.start_line,
            "column": self.span.start_column,
            "end_line": self.span.end_line,
            "end_column": self.span.end_column,
            "suggested_fix": self.suggested_fix,
        }
