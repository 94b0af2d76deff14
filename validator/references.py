"""
validator/references.py — konwencja odwołań do parametrów w ciele zadania.

Heurystyka tekstowa (bez parsowania interpretera):
  - placeholder      ${nazwa} (także z modyfikatorem powłoki: ${nazwa:-x})
                     — jedyna forma uznawana za jawne odwołanie do parametru
  - powłoki          dodatkowo $nazwa liczy się jako użycie parametru
  - inne interpretery dowolne wystąpienie nazwy jako całego słowa liczy się
                     jako użycie (np. os.environ["nazwa"], ENV["nazwa"])

Fałszywe negatywy (odwołania przez pośrednie zmienne) są akceptowane.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from data_model import SourceMap, Span, TaskNode

DEFAULT_PLACEHOLDER_PATTERN = (
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_-]*)(?:[:?+#%/^,@][^}]*)?\}"
)

_BARE_VARIABLE_RE = re.compile(r"\$(?P<name>[A-Za-z_][A-Za-z0-9_]*)")

SHELL_INTERPRETERS: frozenset[str] = frozenset({
    "sh", "bash", "zsh", "fish", "dash", "ksh",
})

# Interpretery obsługiwane przez mask
DEFAULT_INTERPRETERS: frozenset[str] = SHELL_INTERPRETERS | frozenset({
    "node", "js", "javascript",
    "python", "py",
    "ruby", "rb",
    "php",
    "nu", "nushell",
    "powershell", "pwsh",
    "cmd", "bat", "batch",
})

# Zmienne ustawiane przez mask lub zwykle obecne w środowisku
DEFAULT_KNOWN_VARIABLES: frozenset[str] = frozenset({
    "MASK", "MASKFILE_DIR",
    "HOME", "PATH", "PWD", "USER", "SHELL", "TMPDIR",
})


@dataclass(frozen=True, slots=True)
class Reference:
    """Wystąpienie placeholdera w ciele: linia i kolumna liczone od 0."""
    name: str
    line: int
    column: int
    length: int


@functools.lru_cache(maxsize=32)
def compile_placeholder(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def find_placeholders(body: str, pattern: re.Pattern[str]) -> list[Reference]:
    """Zwraca placeholdery w kolejności występowania."""
    refs: list[Reference] = []
    for lineno, line in enumerate(body.split("\n")):
        for m in pattern.finditer(line):
            refs.append(Reference(
                name=m.group("name"),
                line=lineno,
                column=m.start(),
                length=m.end() - m.start(),
            ))
    return refs


def references_parameter(
    body: str,
    name: str,
    interpreter: str | None,
    pattern: re.Pattern[str],
) -> bool:
    """Czy ciało zadania używa parametru `name`?"""
    if any(ref.name == name for ref in find_placeholders(body, pattern)):
        return True
    if interpreter is None or interpreter.lower() in SHELL_INTERPRETERS:
        return any(m.group("name") == name for m in _BARE_VARIABLE_RE.finditer(body))
    word = re.compile(rf"(?<![A-Za-z0-9_]){re.escape(name)}(?![A-Za-z0-9_])")
    return word.search(body) is not None


def reference_span(node: TaskNode, ref: Reference, source: SourceMap | None) -> Span:
    """Span placeholdera w dokumencie; bez źródła — span nagłówka zadania."""
    if source is None or node.body_span is None:
        return node.heading_span
    line = node.body_span.start_line + ref.line
    start = source.offset_of(line, ref.column + 1)
    return source.span(start, start + ref.length)
