"""
validator/engine.py — silnik reguł.

RuleEngine(rules, config, workers).run(root, carried, source) -> list[Diagnostic]

Etapy:
  1 — filtr reguł wyłączonych w konfiguracji
  2 — ewaluacja reguł (sekwencyjnie lub na puli wątków, workers > 1)
  3 — znaleziska przeniesione z ekstrakcji/budowy drzewa
  4 — nadanie poziomów (domyślny reguły lub nadpisany w konfiguracji)
  5 — scalenie: znalezisko przeniesione identyczne z wynikiem reguły jest pomijane,
      pozostałe powtórzenia zostają; sortowanie wg (linia, kolumna, kod)

Reguły tylko czytają drzewo, więc kolejność ewaluacji nie wpływa na wynik.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence

from data_model import Diagnostic, Finding, Severity, SourceMap, TaskNode

from .config import LintConfig
from .rules import BUILTIN_RULES
from .types import CARRIED_SEVERITY, Rule, RuleContext

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Uruchamia zestaw reguł na drzewie zadań.

    Użycie:
        engine      = RuleEngine(config=LintConfig.from_file("masklint.json"))
        diagnostics = engine.run(result.root, result.findings, SourceMap(text))
    """

    def __init__(
        self,
        rules: Sequence[Rule] | None = None,
        config: LintConfig | None = None,
        workers: int = 1,
    ) -> None:
        self._rules: list[Rule] = list(BUILTIN_RULES if rules is None else rules)
        self._config = config or LintConfig.default()
        self._workers = max(1, workers)

    @property
    def config(self) -> LintConfig:
        return self._config

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def run(
        self,
        root: TaskNode,
        carried: Iterable[Finding] = (),
        source: SourceMap | None = None,
    ) -> list[Diagnostic]:
        """
        Zwraca posortowaną listę diagnostyk dla drzewa.

        Args:
            root:    korzeń drzewa zadań
            carried: znaleziska z ekstrakcji metadanych i budowy drzewa
            source:  mapa źródła do precyzyjnych spanów w body (opcjonalnie)
        """
        context = RuleContext(config=self._config, source=source)
        active = [r for r in self._rules if self._config.is_enabled(r.code)]

        if self._workers > 1 and len(active) > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                batches = list(pool.map(lambda r: self._evaluate(r, root, context), active))
        else:
            batches = [self._evaluate(r, root, context) for r in active]

        diagnostics: list[Diagnostic] = [d for batch in batches for d in batch]
        from_rules = set(diagnostics)

        for finding in carried:
            if not self._config.is_enabled(finding.rule_code):
                continue
            default = CARRIED_SEVERITY.get(finding.rule_code, Severity.WARNING)
            diagnostic = finding.with_severity(
                self._config.severity_for(finding.rule_code, default)
            )
            # Ta sama diagnostyka z reguły (duplicate-task-name z budowy drzewa)
            if diagnostic in from_rules:
                continue
            diagnostics.append(diagnostic)

        logger.debug(
            "%d reguł aktywnych, %d diagnostyk", len(active), len(diagnostics),
        )
        return sorted(diagnostics)

    # ------------------------------------------------------------------
    # Wewnętrzna implementacja
    # ------------------------------------------------------------------

    def _evaluate(self, rule: Rule, root: TaskNode, context: RuleContext) -> list[Diagnostic]:
        severity = self._config.severity_for(rule.code, rule.severity)
        return [f.with_severity(severity) for f in rule.evaluate(root, context)]
