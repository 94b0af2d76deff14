"""
masklint — linter plików maskfile (narzędzie mask).

Użycie:
  masklint [--maskfile PLIK] [--no-warnings] [--config PLIK] [-v] <komenda> [opcje]

Komendy:
  run     Lintuje maskfile: reguły masklint + zewnętrzne lintery bloków kodu.
  dump    Zapisuje bloki kodu zadań jako pliki skryptów w katalogu.
  tasks   Wyświetla drzewo zadań z parametrami i interpreterami.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from masklint._config import load_environment
from masklint._logging import setup_logging
from masklint.commands import dump as cmd_dump
from masklint.commands import run as cmd_run
from masklint.commands import tasks as cmd_tasks

VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="masklint",
        description="masklint — linter plików maskfile.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"masklint {VERSION}"
    )
    parser.add_argument(
        "--maskfile",
        default="maskfile.md",
        metavar="PLIK",
        help="Ścieżka do maskfile (domyślnie: maskfile.md).",
    )
    parser.add_argument(
        "--no-warnings",
        action="store_true",
        help="Pokazuj tylko błędy (ukrywa ostrzeżenia i informacje).",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="PLIK",
        help="Plik konfiguracji JSON (domyślnie: $MASKLINT_CONFIG).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logi diagnostyczne (poziom DEBUG) na stderr.",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_run.add_parser(subparsers)
    cmd_dump.add_parser(subparsers)
    cmd_tasks.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_environment()
    setup_logging("DEBUG" if args.verbose else None)
    args.func(args)


if __name__ == "__main__":
    main()
