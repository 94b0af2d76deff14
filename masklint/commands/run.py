"""Komenda: masklint run — lintuje maskfile (reguły + zewnętrzne lintery)."""

from __future__ import annotations

import argparse
import pathlib
import tempfile

from rich.console import Console
from rich.markup import escape

from data_model import Diagnostic, Severity, SourceMap
from linters import LinterNotFoundError, LintResultType, ScriptReport, lint_scripts
from masklint._config import load_config, read_maskfile
from masklint._render import print_json_lines, print_table
from validator import lint_document

console = Console()


# ---------------------------------------------------------------------------
# Wyświetlanie wyników
# ---------------------------------------------------------------------------

def _show_external(reports: list[ScriptReport], no_warnings: bool) -> None:
    for report in reports:
        result = report.result
        if not result.message:
            continue
        if result.result_type is LintResultType.WARNING and no_warnings:
            continue
        console.print(f"[bold cyan underline]{escape(report.script.full_name)}[/bold cyan underline]")
        console.print(result.message, markup=False, highlight=False)


def _visible(diagnostics: list[Diagnostic], no_warnings: bool) -> list[Diagnostic]:
    if not no_warnings:
        return diagnostics
    return [d for d in diagnostics if d.severity is Severity.ERROR]


# ---------------------------------------------------------------------------
# Komenda
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    text = read_maskfile(args.maskfile)
    config = load_config(args.config)

    report = lint_document(text, config, workers=args.workers)

    # --- Zewnętrzne lintery ----------------------------------------------
    external: list[ScriptReport] = []
    if report.tree is not None and not args.no_external:
        with tempfile.TemporaryDirectory(prefix="masklint-") as tmp:
            try:
                external = lint_scripts(report.tree, pathlib.Path(tmp), SourceMap(text))
            except LinterNotFoundError as exc:
                console.print(f"[red]{escape(str(exc))}[/red]")
                raise SystemExit(1)
            except OSError as exc:
                console.print(f"[red]Nie udało się zapisać skryptu do lintowania:[/red] {escape(str(exc))}")
                raise SystemExit(1)

    failed_scripts = sum(1 for r in external if r.result.has_findings)

    # --- Wynik -----------------------------------------------------------
    if args.format == "json":
        external_diagnostics = [d for r in external for d in r.result.diagnostics]
        combined = sorted([*report.diagnostics, *external_diagnostics])
        print_json_lines(_visible(combined, args.no_warnings), args.maskfile)
    else:
        visible = _visible(report.diagnostics, args.no_warnings)
        if visible:
            print_table(console, visible)
        _show_external(external, args.no_warnings)

        if not visible and not failed_scripts:
            console.print(f"[green]OK[/green]  {escape(args.maskfile)}")

    errors = len(report.errors)
    if errors or failed_scripts:
        if args.format != "json":
            parts = []
            if errors:
                parts.append(f"{errors} błąd(ów)")
            if failed_scripts:
                parts.append(f"{failed_scripts} plik(ów) z uwagami linterów")
            console.print(f"[bold red]{escape(args.maskfile)}: {', '.join(parts)}.[/bold red]")
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "run",
        help="Lintuje maskfile (reguły masklint + zewnętrzne lintery).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Lintuje maskfile:

  1  reguły masklint     (drzewo zadań, parametry, interpretery)
  2  zewnętrzne lintery  (shellcheck, ruff, rubocop, nu-check — każdy
                          blok kodu zapisywany jest do pliku tymczasowego)

Kod wyjścia 1, gdy jest co najmniej jeden błąd lub uwaga zewnętrznego lintera.

Przykłady:
  masklint run
  masklint --maskfile ci/maskfile.md run --no-external
  masklint run --format json > raport.jsonl
        """,
    )
    p.add_argument(
        "--format", "-f",
        choices=("text", "json"),
        default="text",
        help="Format wyjścia: tabela (text) lub JSON lines (json).",
    )
    p.add_argument(
        "--no-external",
        action="store_true",
        help="Nie uruchamiaj zewnętrznych linterów.",
    )
    p.add_argument(
        "--workers", "-w",
        type=int,
        default=1,
        metavar="N",
        help="Liczba wątków do ewaluacji reguł (domyślnie: 1).",
    )
    p.set_defaults(func=run)
