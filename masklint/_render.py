"""Wyświetlanie diagnostyk: tabela rich lub JSON lines."""

from __future__ import annotations

import json
import sys
from typing import Iterable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model import Diagnostic, Severity

SEVERITY_STYLE: dict[Severity, str] = {
    Severity.ERROR:   "red",
    Severity.WARNING: "yellow",
    Severity.INFO:    "cyan",
}


def print_table(console: Console, diagnostics: list[Diagnostic]) -> None:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Linia",     style="cyan", no_wrap=True, justify="right")
    table.add_column("Poziom",    no_wrap=True)
    table.add_column("Kod",       style="yellow", no_wrap=True)
    table.add_column("Komunikat")
    table.add_column("Poprawka",  style="dim")

    for d in diagnostics:
        style = SEVERITY_STYLE[d.severity]
        table.add_row(
            f"{d.span.start_line}:{d.span.start_column}",
            f"[{style}]{d.severity}[/{style}]",
            escape(d.rule_code),
            escape(d.message),
            escape(d.suggested_fix or ""),
        )
    console.print(table)


def print_json_lines(diagnostics: Iterable[Diagnostic], file: str) -> None:
    lines = [json.dumps(d.to_record(file), ensure_ascii=False) for d in diagnostics]
    output = "".join(f"{line}\n" for line in lines)
    try:
        sys.stdout.buffer.write(output.encode("utf-8"))
        sys.stdout.buffer.flush()
    except AttributeError:
        print(output, end="")
