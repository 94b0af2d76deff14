"""
validator/config.py — konfiguracja silnika reguł.

LintConfig — włączanie/wyłączanie reguł, nadpisywanie poziomów,
             lista dozwolonych interpreterów, znane zmienne środowiska,
             wzorzec placeholdera.

Format pliku (JSON, walidowany schematem CONFIG_SCHEMA):

    {
        "rules": {
            "missing-description": {"enabled": true, "severity": "warning"},
            "unused-parameter":    {"enabled": false}
        },
        "allowed_interpreters": ["sh", "bash", "python"],
        "known_variables":      ["MASK", "MASKFILE_DIR"],
        "placeholder_pattern":  "\\\\$\\\\{(?P<name>[A-Za-z_]+)\\\\}"
    }

Brakujące klucze przyjmują wartości domyślne.
"""

from __future__ import annotations

import json
import logging
import pathlib
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

import jsonschema

from data_model import Severity
from data_model.codes import RuleCode

from .references import (
    DEFAULT_INTERPRETERS,
    DEFAULT_KNOWN_VARIABLES,
    DEFAULT_PLACEHOLDER_PATTERN,
    compile_placeholder,
)

logger = logging.getLogger(__name__)

# Kodów fatalnych nie da się wyłączyć
FATAL_CODES: frozenset[str] = frozenset({
    RuleCode.UNTERMINATED_CODE_FENCE,
    RuleCode.ORPHAN_CODE_FENCE,
})

CONFIGURABLE_CODES: tuple[str, ...] = tuple(
    code.value for code in RuleCode if code not in FATAL_CODES
)

# Reguły wyłączone, dopóki konfiguracja ich nie wspomni.
# missing-description jest opcjonalna: domyślny raport obejmuje tylko
# problemy strukturalne, opis zadania jest zaleceniem stylu.
DEFAULT_DISABLED: frozenset[str] = frozenset({RuleCode.MISSING_DESCRIPTION})

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "rules": {
            "type": "object",
            "propertyNames": {"enum": list(CONFIGURABLE_CODES)},
            "additionalProperties": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "enabled": {"type": "boolean"},
                    "severity": {"enum": [s.value for s in Severity]},
                },
            },
        },
        "allowed_interpreters": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
        },
        "known_variables": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
        },
        "placeholder_pattern": {"type": "string", "minLength": 1},
    },
}


class ConfigError(Exception):
    """Niepoprawna konfiguracja; `errors` zawiera komunikaty walidacji."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


# ---------------------------------------------------------------------------
# Typy
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RuleSettings:
    enabled: bool = True
    severity: Severity | None = None


@dataclass(frozen=True, slots=True)
class LintConfig:
    """
    Konfiguracja jednego uruchomienia lintera.

    - rules:                kod reguły -> RuleSettings
    - allowed_interpreters: dozwolone interpretery (porównanie bez wielkości liter)
    - known_variables:      nazwy placeholderów, które nie muszą być parametrami
    - placeholder_pattern:  regex z grupą (?P<name>...) wykrywający odwołania
    """

    rules: Mapping[str, RuleSettings] = field(default_factory=dict)
    allowed_interpreters: frozenset[str] = DEFAULT_INTERPRETERS
    known_variables: frozenset[str] = DEFAULT_KNOWN_VARIABLES
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN

    # ------------------------------------------------------------------
    # Zapytania
    # ------------------------------------------------------------------

    def settings_for(self, code: str) -> RuleSettings:
        settings = self.rules.get(code)
        if settings is None:
            return RuleSettings(enabled=code not in DEFAULT_DISABLED)
        return settings

    def is_enabled(self, code: str) -> bool:
        if code in FATAL_CODES:
            return True
        return self.settings_for(code).enabled

    def severity_for(self, code: str, default: Severity) -> Severity:
        return self.settings_for(code).severity or default

    def allows_interpreter(self, interpreter: str) -> bool:
        return interpreter.lower() in {i.lower() for i in self.allowed_interpreters}

    @property
    def placeholder_re(self) -> re.Pattern[str]:
        return compile_placeholder(self.placeholder_pattern)

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def default(cls) -> "LintConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LintConfig":
        """Buduje konfigurację ze słownika; ConfigError przy błędach schematu."""
        validator = jsonschema.Draft202012Validator(CONFIG_SCHEMA)
        errors = []
        for e in sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path)):
            path = "/" + "/".join(str(p) for p in e.absolute_path)
            errors.append(f"{path}: {e.message}")
        if errors:
            raise ConfigError(errors)

        pattern = data.get("placeholder_pattern", DEFAULT_PLACEHOLDER_PATTERN)
        _check_placeholder_pattern(pattern)

        rules = {
            code: RuleSettings(
                enabled=entry.get("enabled", True),
                severity=Severity(entry["severity"]) if "severity" in entry else None,
            )
            for code, entry in data.get("rules", {}).items()
        }

        config = cls(
            rules=rules,
            allowed_interpreters=frozenset(
                data.get("allowed_interpreters", DEFAULT_INTERPRETERS)
            ),
            known_variables=frozenset(
                data.get("known_variables", DEFAULT_KNOWN_VARIABLES)
            ),
            placeholder_pattern=pattern,
        )
        logger.debug("konfiguracja: %d ustawień reguł", len(rules))
        return config

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> "LintConfig":
        """Ładuje konfigurację z pliku JSON."""
        path = pathlib.Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigError([f"{path}: niepoprawny JSON ({exc})"]) from exc
        return cls.from_dict(data)


def _check_placeholder_pattern(pattern: str) -> None:
    try:
        compiled = compile_placeholder(pattern)
    except re.error as exc:
        raise ConfigError([f"/placeholder_pattern: niepoprawny regex ({exc})"]) from exc
    if "name" not in compiled.groupindex:
        raise ConfigError(["/placeholder_pattern: wzorzec musi zawierać grupę (?P<name>...)"])
