"""Ładowanie maskfile i konfiguracji — ścieżki z opcji CLI lub zmiennych środowiskowych."""

from __future__ import annotations

import os
import pathlib

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from validator import ConfigError, LintConfig

console = Console(stderr=True)

ENV_CONFIG = "MASKLINT_CONFIG"


def load_environment() -> None:
    """Wczytuje .env z katalogu roboczego (zmienne już ustawione mają pierwszeństwo)."""
    load_dotenv(pathlib.Path.cwd() / ".env")


def read_maskfile(path: str) -> str:
    maskfile = pathlib.Path(path)
    if not maskfile.exists():
        console.print(f"[red]Brak pliku maskfile:[/red] {escape(str(maskfile))}")
        raise SystemExit(1)
    try:
        return maskfile.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        console.print(f"[red]Maskfile nie jest poprawnym UTF-8[/red] {escape(str(maskfile))}: {exc.reason} (bajt {exc.start})")
        raise SystemExit(1)


def load_config(path: str | None) -> LintConfig:
    path = path or os.getenv(ENV_CONFIG)
    if not path:
        return LintConfig.default()

    config_path = pathlib.Path(path)
    if not config_path.exists():
        console.print(f"[red]Brak pliku konfiguracji:[/red] {escape(str(config_path))}")
        raise SystemExit(1)

    try:
        return LintConfig.from_file(config_path)
    except ConfigError as exc:
        console.print(f"[red]Niepoprawna konfiguracja[/red] {escape(str(config_path))}:")
        for error in exc.errors:
            console.print(f"  [red]·[/red] {escape(error)}")
        raise SystemExit(1)
