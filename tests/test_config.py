"""Testy konfiguracji reguł (LintConfig, walidacja schematem)."""

from __future__ import annotations

import json

import pytest

from data_model import Severity
from data_model.codes import RuleCode
from validator import ConfigError, LintConfig


class TestDefaults:
    def test_rule_defaults(self) -> None:
        config = LintConfig.default()
        assert config.is_enabled(RuleCode.EMPTY_TASK)
        assert not config.is_enabled(RuleCode.MISSING_DESCRIPTION)
        assert config.is_enabled(RuleCode.ORPHAN_CODE_FENCE)
        assert config.severity_for(RuleCode.EMPTY_TASK, Severity.WARNING) is Severity.WARNING

    def test_allows_interpreter_ignores_case(self) -> None:
        config = LintConfig.default()
        assert config.allows_interpreter("Python")
        assert not config.allows_interpreter("perl")

    def test_default_placeholder_has_name_group(self) -> None:
        m = LintConfig.default().placeholder_re.search("echo ${env:-dev}")
        assert m is not None and m.group("name") == "env"


class TestFromDict:
    def test_rule_settings(self) -> None:
        config = LintConfig.from_dict({
            "rules": {
                "missing-description": {"enabled": True, "severity": "error"},
                "unused-parameter": {"enabled": False},
            },
        })
        assert config.is_enabled(RuleCode.MISSING_DESCRIPTION)
        assert config.severity_for(RuleCode.MISSING_DESCRIPTION, Severity.INFO) is Severity.ERROR
        assert not config.is_enabled(RuleCode.UNUSED_PARAMETER)

    def test_rule_entry_without_enabled_turns_rule_on(self) -> None:
        config = LintConfig.from_dict({"rules": {"missing-description": {"severity": "info"}}})
        assert config.is_enabled(RuleCode.MISSING_DESCRIPTION)

    @pytest.mark.parametrize(
        "data",
        [
            {"rules": {"no-such-rule": {"enabled": False}}},
            {"rules": {"unterminated-code-fence": {"enabled": False}}},
            {"rules": {"empty-task": {"severity": "fatal"}}},
            {"rules": {"empty-task": {"enabled": "no"}}},
            {"allowed_interpreters": "bash"},
            {"unexpected": 1},
        ],
    )
    def test_schema_errors(self, data) -> None:
        with pytest.raises(ConfigError) as exc_info:
            LintConfig.from_dict(data)
        assert exc_info.value.errors

    def test_placeholder_without_name_group(self) -> None:
        with pytest.raises(ConfigError, match="name"):
            LintConfig.from_dict({"placeholder_pattern": r"\$\{\w+\}"})

    def test_placeholder_invalid_regex(self) -> None:
        with pytest.raises(ConfigError):
            LintConfig.from_dict({"placeholder_pattern": "(unclosed"})


class TestFromFile:
    def test_loads_json_file(self, tmp_path) -> None:
        path = tmp_path / "masklint.json"
        path.write_text(json.dumps({"known_variables": ["CI"]}), encoding="utf-8")
        config = LintConfig.from_file(path)
        assert config.known_variables == frozenset({"CI"})

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "masklint.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON"):
            LintConfig.from_file(path)

    def test_file_that_is_not_utf8(self, tmp_path) -> None:
        path = tmp_path / "masklint.json"
        path.write_bytes(b'{"known_variables": ["\xff"]}')
        with pytest.raises(ConfigError, match="JSON"):
            LintConfig.from_file(path)
