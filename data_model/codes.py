"""
data_model/codes.py — stałe kody reguł i błędów strukturalnych.
"""

from __future__ import annotations

from enum import StrEnum


class RuleCode(StrEnum):
    """Kody diagnostyk masklint."""

    # Błędy strukturalne (fatalne, brak drzewa)
    UNTERMINATED_CODE_FENCE        = "unterminated-code-fence"
    ORPHAN_CODE_FENCE              = "orphan-code-fence"

    # Metadane i budowa drzewa (przenoszone do silnika reguł)
    INVALID_PARAMETER_DECLARATION  = "invalid-parameter-declaration"
    MULTIPLE_BODIES                = "multiple-bodies"

    # Reguły drzewa zadań
    DUPLICATE_TASK_NAME            = "duplicate-task-name"
    MISSING_TASK_NAME              = "missing-task-name"
    EMPTY_TASK                     = "empty-task"
    MISSING_DESCRIPTION            = "missing-description"

    # Interpreter
    UNKNOWN_INTERPRETER            = "unknown-interpreter"
    MISSING_INTERPRETER            = "missing-interpreter"

    # Parametry
    DUPLICATE_PARAMETER_NAME       = "duplicate-parameter-name"
    UNDECLARED_PARAMETER_REFERENCE = "undeclared-parameter-reference"
    UNUSED_PARAMETER               = "unused-parameter"
