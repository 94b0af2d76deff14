"""Wspólne fixture'y testów masklint."""

from __future__ import annotations

import pathlib
from typing import Callable

import pytest

from data_model import Span, TaskNode

# Przykład z dokumentacji: zduplikowany nagłówek bez bloku kodu
E2E_MASKFILE = (
    "# build\n"
    "- target=release: build target\n"
    "```bash\n"
    "echo building ${target}\n"
    "```\n"
    "# build\n"
    "echo duplicate\n"
)


def line_span(line: int, start_column: int = 1, end_column: int = 10) -> Span:
    """Span w jednej linii (offsety bajtowe nieistotne w testach reguł)."""
    return Span(
        start=0,
        end=0,
        start_line=line,
        start_column=start_column,
        end_line=line,
        end_column=end_column,
    )


@pytest.fixture
def e2e_text() -> str:
    return E2E_MASKFILE


@pytest.fixture
def span_at() -> Callable[..., Span]:
    return line_span


@pytest.fixture
def make_task() -> Callable[..., TaskNode]:
    """Fabryka węzłów drzewa zadań z uzupełnionymi spanami."""

    def _make(name: str, line: int = 1, depth: int = 1, **kwargs) -> TaskNode:
        span = line_span(line)
        return TaskNode(name=name, depth=depth, span=span, heading_span=span, **kwargs)

    return _make


@pytest.fixture
def write_maskfile(tmp_path: pathlib.Path) -> Callable[[str], pathlib.Path]:
    def _write(text: str, name: str = "maskfile.md") -> pathlib.Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
