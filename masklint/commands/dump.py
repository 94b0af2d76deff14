"""Komenda: masklint dump — zapisuje bloki kodu zadań jako pliki skryptów."""

from __future__ import annotations

import argparse
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linters import dump_scripts
from masklint._config import read_maskfile
from masklint._render import print_table
from validator import lint_document

console = Console()


def run(args: argparse.Namespace) -> None:
    text = read_maskfile(args.maskfile)
    report = lint_document(text)
    if report.tree is None:
        print_table(console, report.diagnostics)
        raise SystemExit(1)

    out_dir = pathlib.Path(args.output)
    try:
        dumped = dump_scripts(report.tree, out_dir)
    except FileExistsError as exc:
        console.print(f"[red]Plik już istnieje:[/red] {escape(str(exc.filename))}")
        raise SystemExit(1)
    except OSError as exc:
        console.print(f"[red]Nie udało się zapisać skryptu:[/red] {escape(str(exc))}")
        raise SystemExit(1)

    if not dumped:
        console.print("[yellow]Brak zadań z blokiem kodu.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("ZADANIE",  style="bold cyan", no_wrap=True)
    table.add_column("LINTER",   no_wrap=True)
    table.add_column("PLIK")
    for item in dumped:
        table.add_row(escape(item.script.full_name), str(item.handler), escape(str(item.path)))
    console.print(table)
    console.print(f"  [dim]{len(dumped)} plików w {escape(str(out_dir))}[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "dump",
        help="Zapisuje bloki kodu wszystkich zadań jako pliki w katalogu.",
        description=(
            "Zapisuje blok kodu każdego zadania do pliku <pełna_nazwa><rozszerzenie> "
            "w podanym katalogu. Istniejące pliki nie są nadpisywane."
        ),
    )
    p.add_argument(
        "--output", "-o",
        required=True,
        metavar="KATALOG",
        help="Katalog docelowy (tworzony w razie potrzeby).",
    )
    p.set_defaults(func=run)
