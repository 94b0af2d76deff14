"""
linters/scripts.py — ekstrakcja ciał zadań do plików skryptów.

collect_scripts(root)                 -> list[Script]    (zadania z body, kolejność dokumentu)
script_file_name(script, handler)     -> str             ("db migrate" + ".sh" → "db_migrate.sh", "db/seed" → "db_seed")
write_script(script, handler, out_dir) -> Path           (nigdy nie nadpisuje istniejącego pliku)
"""

from __future__ import annotations

import logging
import pathlib
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from data_model import Span, TaskNode

if TYPE_CHECKING:
    from .handlers import LanguageHandler

logger = logging.getLogger(__name__)

_UNSAFE_RE = re.compile(r"[\s/\\]+")


@dataclass(frozen=True, slots=True)
class Script:
    """
    Ciało zadania gotowe do zapisania w pliku.

    - full_name:   pełna nazwa komendy, np. "db migrate"
    - interpreter: interpreter z płotka (None gdy brak)
    - source:      treść bloku kodu
    - body_span:   położenie treści w maskfile (do mapowania linii)
    - heading_span: nagłówek zadania
    """
    full_name: str
    interpreter: str | None
    source: str
    body_span: Span | None
    heading_span: Span


def collect_scripts(root: TaskNode) -> list[Script]:
    scripts: list[Script] = []
    for node, ancestors in root.walk():
        if node.body is None:
            continue
        scripts.append(Script(
            full_name=node.full_name(ancestors),
            interpreter=node.interpreter,
            source=node.body,
            body_span=node.body_span,
            heading_span=node.heading_span,
        ))
    return scripts


def script_file_name(script: Script, handler: LanguageHandler, prefix: str = "") -> str:
    """Nazwa pliku skryptu: spacje i separatory ścieżek zamienione na '_'."""
    return prefix + _UNSAFE_RE.sub("_", script.full_name) + handler.extension


def write_script(
    script: Script,
    handler: LanguageHandler,
    out_dir: pathlib.Path,
    prefix: str = "",
) -> pathlib.Path:
    """
    Zapisuje skrypt do out_dir.

    Raises:
        FileExistsError: gdy plik o tej nazwie już istnieje.
    """
    path = out_dir / script_file_name(script, handler, prefix)
    with path.open("x", encoding="utf-8") as fh:
        fh.write(handler.content(script))
    logger.debug("zapisano %s (%s)", path, handler.name)
    return path
