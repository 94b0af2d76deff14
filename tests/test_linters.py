"""Testy zewnętrznych linterów: pliki skryptów, parsowanie wyjścia, mapowanie pozycji."""

from __future__ import annotations

import subprocess

import pytest

from data_model import Severity
from linters import (
    CATCHALL,
    LinterNotFoundError,
    LintResultType,
    Nushell,
    Rubocop,
    Ruff,
    Shellcheck,
    collect_scripts,
    dump_scripts,
    handler_for,
    lint_scripts,
    script_file_name,
    write_script,
)
from validator import parse_document

MASKFILE = (
    "# db\n"
    "## migrate\n"
    "```bash\n"
    "echo one\n"
    "echo $x\n"
    "```\n"
    "# fmt\n"
    "```python\n"
    "print(x)\n"
    "```\n"
    "# hello\n"
    "```node\n"
    "console.log(1)\n"
    "```\n"
)


@pytest.fixture
def parsed():
    return parse_document(MASKFILE)


def _fake_run(stdout: str):
    calls: list[list[str]] = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 1, stdout=stdout.format(path=cmd[-1]), stderr="")

    return run, calls


class TestScripts:
    def test_collect_scripts_uses_full_names(self, parsed) -> None:
        scripts = collect_scripts(parsed.root)
        assert [s.full_name for s in scripts] == ["db migrate", "fmt", "hello"]
        assert scripts[0].interpreter == "bash"
        assert scripts[0].source == "echo one\necho $x"

    def test_file_names(self, parsed) -> None:
        migrate, fmt, hello = collect_scripts(parsed.root)
        assert script_file_name(migrate, Shellcheck()) == "db_migrate.sh"
        assert script_file_name(fmt, Ruff()) == "fmt.py"
        assert script_file_name(hello, CATCHALL) == "hello"

    def test_shell_scripts_get_shebang(self, parsed) -> None:
        migrate = collect_scripts(parsed.root)[0]
        assert Shellcheck().content(migrate) == "#!/usr/bin/env bash\necho one\necho $x"

    def test_existing_file_is_not_overwritten(self, parsed, tmp_path) -> None:
        migrate = collect_scripts(parsed.root)[0]
        path = write_script(migrate, Shellcheck(), tmp_path)
        path.write_text("keep", encoding="utf-8")
        with pytest.raises(FileExistsError):
            write_script(migrate, Shellcheck(), tmp_path)
        assert path.read_text(encoding="utf-8") == "keep"

    def test_dump_creates_output_directory(self, parsed, tmp_path) -> None:
        out_dir = tmp_path / "out" / "scripts"
        dumped = dump_scripts(parsed.root, out_dir)
        assert sorted(p.name for p in out_dir.iterdir()) == ["db_migrate.sh", "fmt.py", "hello"]
        assert [str(d.handler) for d in dumped] == ["shellcheck", "ruff", "catchall"]

    def test_path_separators_in_file_name(self) -> None:
        (seed,) = collect_scripts(parse_document("# db/seed\n```sh\necho\n```\n").root)
        assert script_file_name(seed, Shellcheck()) == "db_seed.sh"
        assert script_file_name(seed, Shellcheck(), prefix="L1_") == "L1_db_seed.sh"


class TestHandlerSelection:
    @pytest.mark.parametrize(
        ("interpreter", "expected"),
        [
            ("bash", Shellcheck),
            ("SH", Shellcheck),
            ("python", Ruff),
            ("rb", Rubocop),
            ("nushell", Nushell),
        ],
    )
    def test_known_interpreters(self, interpreter, expected) -> None:
        assert isinstance(handler_for(interpreter), expected)

    def test_unknown_interpreter_uses_catchall(self) -> None:
        assert handler_for("node") is CATCHALL
        assert handler_for(None) is CATCHALL

    def test_catchall_only_warns(self, parsed, tmp_path) -> None:
        hello = collect_scripts(parsed.root)[2]
        result = CATCHALL.execute(tmp_path / "hello", hello)
        assert result.result_type is LintResultType.WARNING
        assert result.message == "no linter found for target"
        assert not result.has_findings


class TestExecution:
    def test_shellcheck_output_is_mapped_to_maskfile(self, parsed, tmp_path, monkeypatch) -> None:
        run, calls = _fake_run(
            "{path}:3:6: warning: Double quote to prevent globbing and word splitting. [SC2086]\n"
        )
        monkeypatch.setattr(subprocess, "run", run)

        reports = lint_scripts(parsed.root, tmp_path, parsed.source)
        migrate = reports[0]
        assert calls[0][:2] == ["shellcheck", "--format=gcc"]
        assert migrate.result.has_findings
        assert migrate.result.message.startswith("line 2:6: warning:")

        (diagnostic,) = migrate.result.diagnostics
        assert diagnostic.rule_code == "shellcheck/SC2086"
        assert diagnostic.severity is Severity.WARNING
        assert diagnostic.message == "Double quote to prevent globbing and word splitting."
        assert (diagnostic.span.start_line, diagnostic.span.start_column) == (5, 6)

    def test_ruff_summary_line_is_dropped(self, parsed, tmp_path, monkeypatch) -> None:
        run, _ = _fake_run("{path}:1:7: F821 Undefined name `x`\nFound 1 error.\n")
        monkeypatch.setattr(subprocess, "run", run)

        fmt = collect_scripts(parsed.root)[1]
        path = write_script(fmt, Ruff(), tmp_path)
        result = Ruff().execute(path, fmt, parsed.source)

        assert "Found" not in result.message
        (diagnostic,) = result.diagnostics
        assert diagnostic.rule_code == "ruff/F821"
        assert diagnostic.severity is Severity.ERROR
        assert (diagnostic.span.start_line, diagnostic.span.start_column) == (9, 7)

    def test_clean_output_has_no_findings(self, parsed, tmp_path, monkeypatch) -> None:
        run, _ = _fake_run("")
        monkeypatch.setattr(subprocess, "run", run)

        migrate = collect_scripts(parsed.root)[0]
        path = write_script(migrate, Shellcheck(), tmp_path)
        result = Shellcheck().execute(path, migrate, parsed.source)
        assert result.result_type is LintResultType.FINDINGS
        assert not result.has_findings
        assert result.diagnostics == []

    def test_positions_are_clamped_to_body(self, parsed, tmp_path, monkeypatch) -> None:
        run, _ = _fake_run("{path}:99:1: error: Parsing stopped here. [SC1089]\n")
        monkeypatch.setattr(subprocess, "run", run)

        migrate = collect_scripts(parsed.root)[0]
        path = write_script(migrate, Shellcheck(), tmp_path)
        (diagnostic,) = Shellcheck().execute(path, migrate, parsed.source).diagnostics
        assert diagnostic.span.start_line == 5
        assert diagnostic.severity is Severity.ERROR

    def test_missing_executable(self, parsed, tmp_path, monkeypatch) -> None:
        def run(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(subprocess, "run", run)
        with pytest.raises(LinterNotFoundError, match=r"executable for shellcheck not found in \$PATH"):
            lint_scripts(parsed.root, tmp_path, parsed.source)

    def test_duplicate_task_names_get_separate_files(self, tmp_path, monkeypatch) -> None:
        run, calls = _fake_run("")
        monkeypatch.setattr(subprocess, "run", run)
        parsed = parse_document("# a\n```sh\necho 1\n```\n# a\n```sh\necho 2\n```\n")

        first, second = lint_scripts(parsed.root, tmp_path, parsed.source)
        assert (first.path.name, second.path.name) == ("L1_a.sh", "L5_a.sh")
        assert second.path.read_text(encoding="utf-8") == "#!/usr/bin/env sh\necho 2"
        assert [cmd[-1] for cmd in calls] == [str(first.path), str(second.path)]
