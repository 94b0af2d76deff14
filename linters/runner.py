"""
linters/runner.py — zapis skryptów i uruchamianie zewnętrznych linterów.

dump_scripts(root, out_dir, unique=False) -> list[DumpedScript]
lint_scripts(root, out_dir, source=None)  -> list[ScriptReport]

Nazwy plików z dump_scripts to pełne nazwy zadań; dwa zadania o tej samej
nazwie dają FileExistsError. lint_scripts pisze do własnego katalogu
z prefiksem linii nagłówka ("L12_build.sh"), więc powtórzone nazwy
nie kolidują.
"""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass

from data_model import SourceMap, TaskNode

from .handlers import LanguageHandler, LintResult, handler_for
from .scripts import Script, collect_scripts, write_script

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DumpedScript:
    script: Script
    handler: LanguageHandler
    path: pathlib.Path


@dataclass(frozen=True, slots=True)
class ScriptReport:
    script: Script
    handler: LanguageHandler
    path: pathlib.Path
    result: LintResult


def dump_scripts(root: TaskNode, out_dir: pathlib.Path, unique: bool = False) -> list[DumpedScript]:
    """
    Zapisuje każde ciało zadania jako plik w out_dir (tworzonym w razie potrzeby).

    Args:
        unique: poprzedź nazwę pliku numerem linii nagłówka zadania.

    Raises:
        OSError: nie udało się zapisać pliku (m.in. FileExistsError).
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    dumped: list[DumpedScript] = []
    for script in collect_scripts(root):
        handler = handler_for(script.interpreter)
        prefix = f"L{script.heading_span.start_line}_" if unique else ""
        path = write_script(script, handler, out_dir, prefix)
        dumped.append(DumpedScript(script, handler, path))
    return dumped


def lint_scripts(
    root: TaskNode,
    out_dir: pathlib.Path,
    source: SourceMap | None = None,
) -> list[ScriptReport]:
    """
    Zapisuje skrypty do out_dir i uruchamia dla każdego właściwy linter.

    Raises:
        LinterNotFoundError: brak lintera w $PATH (przerywa całe lintowanie).
        OSError: nie udało się zapisać skryptu.
    """
    reports: list[ScriptReport] = []
    for item in dump_scripts(root, out_dir, unique=True):
        result = item.handler.execute(item.path, item.script, source)
        logger.debug(
            "%s: %s (%d diagnostyk)", item.script.full_name, item.handler, len(result.diagnostics),
        )
        reports.append(ScriptReport(item.script, item.handler, item.path, result))
    return reports
