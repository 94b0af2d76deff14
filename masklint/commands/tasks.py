"""Komenda: masklint tasks — wyświetla drzewo zadań maskfile."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from data_model import TaskNode
from masklint._config import read_maskfile
from masklint._render import print_table
from validator import lint_document

console = Console()


def _label(node: TaskNode) -> str:
    label = f"[bold cyan]{escape(node.name) or '(bez nazwy)'}[/bold cyan]"
    for param in node.parameters:
        marker = "" if param.required else "?"
        label += f" [yellow]({escape(param.name)}{marker})[/yellow]"
    if node.interpreter:
        label += f" [dim]\\[{escape(node.interpreter)}][/dim]"
    if node.description:
        first_line = node.description.split("\n", 1)[0]
        label += f" — {escape(first_line)}"
    return label


def _add_children(branch: Tree, node: TaskNode) -> None:
    for child in node.children:
        _add_children(branch.add(_label(child)), child)


def run(args: argparse.Namespace) -> None:
    text = read_maskfile(args.maskfile)
    report = lint_document(text)
    if report.tree is None:
        print_table(console, report.diagnostics)
        raise SystemExit(1)

    if not report.tree.children:
        console.print("[yellow]Brak zadań w maskfile.[/yellow]")
        return

    tree = Tree(f"[bold]{escape(args.maskfile)}[/bold]")
    _add_children(tree, report.tree)
    console.print(tree)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "tasks",
        help="Wyświetla drzewo zadań (nazwy, parametry, interpretery).",
    )
    p.set_defaults(func=run)
