"""
linters — zewnętrzne lintery dla ciał zadań (shellcheck, ruff, rubocop, nu-check).

Interfejs publiczny:
    handler_for(interpreter)          — handler dla interpretera (catchall gdy brak)
    dump_scripts(root, out_dir)       — zapis ciał zadań do plików
    lint_scripts(root, out_dir, src)  — zapis + uruchomienie linterów
    LintResult, LintResultType, LinterNotFoundError, Script
"""

from .scripts import Script, collect_scripts, script_file_name, write_script
from .handlers import (
    CATCHALL,
    LanguageHandler,
    LinterNotFoundError,
    LintResult,
    LintResultType,
    Nushell,
    Rubocop,
    Ruff,
    Shellcheck,
    handler_for,
    map_position,
)
from .runner import DumpedScript, ScriptReport, dump_scripts, lint_scripts

__all__ = [
    "Script",
    "collect_scripts",
    "script_file_name",
    "write_script",
    "CATCHALL",
    "LanguageHandler",
    "LinterNotFoundError",
    "LintResult",
    "LintResultType",
    "Nushell",
    "Rubocop",
    "Ruff",
    "Shellcheck",
    "handler_for",
    "map_position",
    "DumpedScript",
    "ScriptReport",
    "dump_scripts",
    "lint_scripts",
]
