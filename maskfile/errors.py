"""
maskfile/errors.py — błędy strukturalne parsera.

ScanError  — dokumentu nie da się podzielić na bloki (niezamknięty płotek)
BuildError — z bloków nie da się zbudować drzewa (blok kodu przed nagłówkiem)

Oba przerywają przetwarzanie dokumentu; pipeline zamienia je
w pojedynczą fatalną diagnostykę (to_diagnostic).
"""

from __future__ import annotations

from data_model import Diagnostic, Severity, Span
from data_model.codes import RuleCode


class MaskfileError(Exception):
    """Bazowy błąd strukturalny: kod + span + komunikat."""

    def __init__(
        self,
        code: RuleCode,
        span: Span,
        message: str,
        suggested_fix: str | None = None,
    ) -> None:
        super().__init__(f"{code} (linia {span.start_line}): {message}")
        self.code = code
        self.span = span
        self.message = message
        self.suggested_fix = suggested_fix

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            severity=Severity.ERROR,
            rule_code=self.code,
            message=self.message,
            span=self.span,
            suggested_fix=self.suggested_fix,
        )


class ScanError(MaskfileError):
    pass


class BuildError(MaskfileError):
    pass
