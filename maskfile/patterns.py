"""
maskfile/patterns.py — wzorce regex składni maskfile.

Nagłówki i płotki:
  HEADING_RE        — 0-3 spacje, 1-6 '#', biały znak, tekst
  FENCE_OPEN_RE     — 3+ jednakowe znaki '`' lub '~' + opcjonalny info string
  FENCE_CLOSE_RE    — sam płotek (bez info stringa)

Deklaracje parametrów (jedna na linię listy):
  - [*]nazwa[=domyślna][: opis]
  '*' oznacza parametr wymagany.

Argumenty w nagłówku (konwencja mask):
  ## deploy (env) (region?)
  (nazwa)  — wymagany, (nazwa?) — opcjonalny
"""

from __future__ import annotations

import re

# Nazwa parametru
NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_-]*"
NAME_RE = re.compile(rf"^{NAME_PATTERN}$")

# ---------------------------------------------------------------------------
# Bloki
# ---------------------------------------------------------------------------

HEADING_RE = re.compile(r"^ {0,3}(?P<marks>#{1,6})[ \t]+(?P<text>.*)$")

# Opcjonalna sekwencja zamykająca: "## build ##"
HEADING_CLOSING_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")

FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>.*?)[ \t]*$")
FENCE_CLOSE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*$")

# ---------------------------------------------------------------------------
# Deklaracje parametrów
# ---------------------------------------------------------------------------

LIST_ITEM_RE = re.compile(r"^\s*[-+][ \t]+(?P<item>.*?)\s*$")

# Pierwszy token zakończony ':' / '=' / końcem linii ("próba deklaracji")
DECLARATION_ATTEMPT_RE = re.compile(r"^\*?[^\s:=]+(?:\s*:|=|$)")

DECLARATION_RE = re.compile(
    rf"^(?P<required>\*)?(?P<name>{NAME_PATTERN})"
    r"(?:=(?P<default>[^:]*?))?"
    r"(?:\s*:\s*(?P<description>.*?))?\s*$"
)

# ---------------------------------------------------------------------------
# Nagłówek z argumentami pozycyjnymi
# ---------------------------------------------------------------------------

HEADING_ARGS_RE = re.compile(r"^(?P<name>.*?)(?P<args>(?:\s*\([^()]*\))*)\s*$")
HEADING_ARG_RE = re.compile(r"\((?P<arg>[^()]*)\)")
