"""
linters/handlers.py — zewnętrzne lintery dla ciał zadań.

Każdy handler:
  - extension  — rozszerzenie pliku skryptu
  - content()  — treść pliku (np. z linią shebang)
  - command()  — wywołanie lintera dla ścieżki
  - execute()  — uruchamia linter i mapuje wynik na diagnostyki maskfile

Mapa interpreter → handler (handler_for):
  sh, bash, dash, ksh  → shellcheck   (--format=gcc)
  py, python           → ruff         (check --output-format=concise)
  rb, ruby             → rubocop      (--format=emacs)
  nu, nushell          → nu-check
  pozostałe            → catchall     (ostrzeżenie: brak lintera)

Błędy:
  LinterNotFoundError — brak pliku wykonywalnego lintera w $PATH.
"""

from __future__ import annotations

import logging
import pathlib
import re
import subprocess
from dataclasses import dataclass, field
from enum import StrEnum

from data_model import Diagnostic, Severity, SourceMap, Span

from .scripts import Script

logger = logging.getLogger(__name__)

# "plik:linia:kolumna: reszta": wspólny format gcc/concise/emacs
_LOCATED_LINE_RE = re.compile(r"^(?P<path>.+?):(?P<line>\d+):(?P<col>\d+):\s*(?P<rest>.*)$")

_SHELLCHECK_RE = re.compile(r"^(?P<level>\w+):\s*(?P<message>.*?)(?:\s*\[(?P<code>SC\d+)\])?$")
_RUFF_RE = re.compile(r"^(?P<code>[A-Z]+[0-9]+)\s+(?:\[\*\]\s+)?(?P<message>.*)$")
_RUBOCOP_RE = re.compile(
    r"^(?P<level>[CRWEF]):\s*(?:\[Correctable\]\s*)?(?P<cop>[A-Za-z]+/[A-Za-z0-9]+):\s*(?P<message>.*)$"
)

_SHELLCHECK_LEVELS: dict[str, Severity] = {
    "error":   Severity.ERROR,
    "warning": Severity.WARNING,
    "note":    Severity.INFO,
    "info":    Severity.INFO,
    "style":   Severity.INFO,
}

_RUBOCOP_LEVELS: dict[str, Severity] = {
    "C": Severity.WARNING,
    "R": Severity.WARNING,
    "W": Severity.WARNING,
    "E": Severity.ERROR,
    "F": Severity.ERROR,
}


class LinterNotFoundError(Exception):
    pass


class LintResultType(StrEnum):
    WARNING  = "warning"
    FINDINGS = "findings"


@dataclass(slots=True)
class LintResult:
    """
    Wynik zewnętrznego lintera dla jednego skryptu.

    - message:     oczyszczone wyjście lintera (puste = brak uwag)
    - result_type: FINDINGS (uwagi lintera) lub WARNING (np. brak lintera)
    - diagnostics: uwagi przemapowane na pozycje w maskfile
    """
    message: str
    result_type: LintResultType
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def warning(cls, message: str) -> "LintResult":
        return cls(message=message, result_type=LintResultType.WARNING)

    @classmethod
    def findings(cls, message: str, diagnostics: list[Diagnostic] | None = None) -> "LintResult":
        return cls(message=message, result_type=LintResultType.FINDINGS, diagnostics=diagnostics or [])

    @property
    def has_findings(self) -> bool:
        return self.result_type is LintResultType.FINDINGS and bool(self.message)


# ---------------------------------------------------------------------------
# Handlery
# ---------------------------------------------------------------------------

class LanguageHandler:
    """Bazowy handler: bez lintera (catchall)."""

    name = "catchall"
    extension = ""
    header_lines = 0

    def __str__(self) -> str:
        return self.name

    def content(self, script: Script) -> str:
        return script.source

    def command(self, path: pathlib.Path) -> list[str]:
        return []

    def execute(self, path: pathlib.Path, script: Script, source: SourceMap | None = None) -> LintResult:
        return LintResult.warning("no linter found for target")

    # ------------------------------------------------------------------

    def _run(self, path: pathlib.Path) -> str:
        cmd = self.command(path)
        logger.debug("uruchamiam: %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise LinterNotFoundError(f"executable for {self.name} not found in $PATH") from exc
        return proc.stdout

    def _parse_rest(self, rest: str) -> tuple[Severity, str, str] | None:
        """(poziom, kod, komunikat) z części linii po 'plik:linia:kolumna:'."""
        return None

    def _collect(self, output: str, path: pathlib.Path, script: Script, source: SourceMap | None) -> LintResult:
        lines: list[str] = []
        diagnostics: list[Diagnostic] = []
        for raw in output.strip().splitlines():
            m = _LOCATED_LINE_RE.match(raw)
            if m is None or pathlib.Path(m.group("path")).name != path.name:
                if raw.strip():
                    lines.append(raw)
                continue
            line = int(m.group("line"))
            col = int(m.group("col"))
            lines.append(f"line {line - self.header_lines}:{col}: {m.group('rest')}")
            parsed = self._parse_rest(m.group("rest"))
            if parsed is None:
                continue
            severity, code, message = parsed
            diagnostics.append(Diagnostic(
                severity=severity,
                rule_code=f"{self.name}/{code}",
                message=message,
                span=map_position(script, line - self.header_lines, col, source),
            ))
        return LintResult.findings("\n".join(lines).strip(), sorted(diagnostics))


class Shellcheck(LanguageHandler):
    name = "shellcheck"
    extension = ".sh"
    header_lines = 1

    def content(self, script: Script) -> str:
        return f"#!/usr/bin/env {script.interpreter}\n{script.source}"

    def command(self, path: pathlib.Path) -> list[str]:
        return ["shellcheck", "--format=gcc", str(path)]

    def execute(self, path: pathlib.Path, script: Script, source: SourceMap | None = None) -> LintResult:
        return self._collect(self._run(path), path, script, source)

    def _parse_rest(self, rest: str) -> tuple[Severity, str, str] | None:
        m = _SHELLCHECK_RE.match(rest)
        if m is None:
            return None
        severity = _SHELLCHECK_LEVELS.get(m.group("level").lower(), Severity.WARNING)
        return severity, m.group("code") or "shellcheck", m.group("message")


class Ruff(LanguageHandler):
    name = "ruff"
    extension = ".py"

    def command(self, path: pathlib.Path) -> list[str]:
        return ["ruff", "check", "--output-format=concise", "--no-cache", "--quiet", str(path)]

    def execute(self, path: pathlib.Path, script: Script, source: SourceMap | None = None) -> LintResult:
        # Podsumowanie "Found N error(s)." nie jest uwagą
        output = "\n".join(
            line for line in self._run(path).splitlines() if not line.startswith("Found ")
        )
        return self._collect(output, path, script, source)

    def _parse_rest(self, rest: str) -> tuple[Severity, str, str] | None:
        m = _RUFF_RE.match(rest)
        if m is None:
            return Severity.ERROR, "syntax", rest
        return Severity.ERROR, m.group("code"), m.group("message")


class Rubocop(LanguageHandler):
    name = "rubocop"
    extension = ".rb"

    def command(self, path: pathlib.Path) -> list[str]:
        return ["rubocop", "--format=emacs", "--display-style-guide", str(path)]

    def execute(self, path: pathlib.Path, script: Script, source: SourceMap | None = None) -> LintResult:
        output = "\n".join(
            line for line in self._run(path).splitlines() if "file inspected" not in line
        )
        return self._collect(output, path, script, source)

    def _parse_rest(self, rest: str) -> tuple[Severity, str, str] | None:
        m = _RUBOCOP_RE.match(rest)
        if m is None:
            return None
        return _RUBOCOP_LEVELS[m.group("level")], m.group("cop"), m.group("message")


class Nushell(LanguageHandler):
    name = "nushell"
    extension = ".nu"

    def command(self, path: pathlib.Path) -> list[str]:
        return [
            "nu", "-c",
            f"if not (nu-check {path}) {{ print 'file could not be parsed by nu-check' }}",
        ]

    def execute(self, path: pathlib.Path, script: Script, source: SourceMap | None = None) -> LintResult:
        message = self._run(path).strip()
        if not message:
            return LintResult.findings("")
        return LintResult.findings(message, [Diagnostic(
            severity=Severity.ERROR,
            rule_code=f"{self.name}/nu-check",
            message=message,
            span=map_position(script, 1, 1, source),
        )])


_HANDLERS: dict[str, LanguageHandler] = {
    interpreter: handler
    for handler, interpreters in (
        (Shellcheck(), ("sh", "bash", "dash", "ksh")),
        (Ruff(),       ("py", "python")),
        (Rubocop(),    ("rb", "ruby")),
        (Nushell(),    ("nu", "nushell")),
    )
    for interpreter in interpreters
}

CATCHALL = LanguageHandler()


def handler_for(interpreter: str | None) -> LanguageHandler:
    if interpreter is None:
        return CATCHALL
    return _HANDLERS.get(interpreter.lower(), CATCHALL)


def map_position(script: Script, line: int, col: int, source: SourceMap | None) -> Span:
    """
    Zamienia pozycję w pliku skryptu (linia/kolumna od 1) na span w maskfile.

    Pozycje w nagłówku skryptu (shebang) przypinane są do pierwszej linii
    treści; bez mapy źródła zwracany jest span nagłówka zadania.
    """
    if source is None or script.body_span is None:
        return script.heading_span
    body = script.body_span
    doc_line = min(max(body.start_line, body.start_line + line - 1), body.end_line)
    line_start = source.line_start(doc_line)
    line_end = source.text.find("\n", line_start)
    if line_end == -1:
        line_end = len(source.text)
    offset = min(line_start + max(col, 1) - 1, line_end)
    return source.span(offset, offset)
