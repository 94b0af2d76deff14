"""Testy ekstrakcji metadanych (nazwy, opisy, deklaracje parametrów)."""

from __future__ import annotations

from data_model import Text
from data_model.codes import RuleCode
from maskfile import TaskHeading, extract_metadata, scan_blocks


def _extract(text: str):
    return extract_metadata(scan_blocks(text))


def _heading(text: str) -> TaskHeading:
    extraction = _extract(text)
    return next(b for b in extraction.blocks if isinstance(b, TaskHeading))


class TestDeclarations:
    def test_declaration_list_under_heading(self) -> None:
        heading = _heading(
            "# build\n\nBuilds the thing.\n\n- *target: build target\n- mode=release\n- verbose\n"
        )
        assert heading.name == "build"
        assert heading.description == "Builds the thing."

        target, mode, verbose = heading.parameters
        assert (target.name, target.required, target.description) == ("target", True, "build target")
        assert (mode.name, mode.default, mode.description) == ("mode", "release", None)
        assert (verbose.name, verbose.required, verbose.default) == ("verbose", False, None)

    def test_default_and_description(self) -> None:
        heading = _heading("# build\n- target=release: build target\n")
        (param,) = heading.parameters
        assert param.default == "release"
        assert param.description == "build target"
        assert param.span.start_line == 2

    def test_prose_list_is_description(self) -> None:
        heading = _heading("# setup\n- Install deps first\n- then run\n")
        assert heading.parameters == ()
        assert heading.description == "- Install deps first\n- then run"

    def test_only_first_paragraph_is_description(self) -> None:
        heading = _heading("# t\n\nFirst.\n\nSecond.\n")
        assert heading.description == "First."
        assert heading.span.end_line == 5

    def test_invalid_name_is_reported_and_skipped(self) -> None:
        extraction = _extract("# build\n- 1bad: x\n- good\n")
        heading = next(b for b in extraction.blocks if isinstance(b, TaskHeading))
        assert [p.name for p in heading.parameters] == ["good"]

        (finding,) = extraction.findings
        assert finding.rule_code == RuleCode.INVALID_PARAMETER_DECLARATION
        assert finding.span.start_line == 2
        assert "1bad" in finding.message


class TestHeadingArguments:
    def test_positional_arguments(self) -> None:
        heading = _heading("## deploy (env) (region?)")
        assert heading.name == "deploy"
        assert heading.depth == 2
        env, region = heading.parameters
        assert (env.name, env.required) == ("env", True)
        assert (region.name, region.required) == ("region", False)
        assert env.span == heading.heading.span

    def test_heading_and_list_parameters_are_merged(self) -> None:
        heading = _heading("# deploy (env)\n- dry_run: only print\n")
        assert [p.name for p in heading.parameters] == ["env", "dry_run"]

    def test_invalid_heading_argument(self) -> None:
        extraction = _extract("# t (1x)")
        (heading,) = extraction.blocks
        assert heading.name == "t"
        assert heading.parameters == ()
        (finding,) = extraction.findings
        assert finding.span == heading.heading.span


class TestPassThrough:
    def test_text_before_first_heading_is_kept(self) -> None:
        extraction = _extract("Intro\n\n# t\n")
        intro, heading = extraction.blocks
        assert isinstance(intro, Text)
        assert isinstance(heading, TaskHeading)

    def test_text_after_fence_is_not_consumed(self) -> None:
        extraction = _extract("# t\n```sh\necho\n```\nTrailing note\n")
        kinds = [type(b).__name__ for b in extraction.blocks]
        assert kinds == ["TaskHeading", "CodeFence", "Text"]
