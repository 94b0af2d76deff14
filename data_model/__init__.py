"""
data_model — struktury danych masklint.

Użycie:
  from data_model import TaskNode, Diagnostic, Severity, Span, ...

Moduły:
  spans       — Span, SourceMap
  blocks      — Heading, CodeFence, Text, Block
  tasks       — Parameter, TaskNode
  diagnostics — Severity, Finding, Diagnostic
"""

from .spans import Span, SourceMap
from .blocks import Block, CodeFence, Heading, Text
from .tasks import Parameter, TaskNode
from .diagnostics import Diagnostic, Finding, Severity

__all__ = [
    # spans
    "Span",
    "SourceMap",
    # blocks
    "Block",
    "CodeFence",
    "Heading",
    "Text",
    # tasks
    "Parameter",
    "TaskNode",
    # diagnostics
    "Diagnostic",
    "Finding",
    "Severity",
]
