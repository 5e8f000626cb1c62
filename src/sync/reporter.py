# src/sync/reporter.py - v1
"""Accumulates per-file import outcomes into an ImportSummary."""

from __future__ import annotations

from annosync.core.models import ImportOutcome, ImportSummary


class ImportReporter:
    """Keeps outcomes in the order they are recorded plus the running total.

    Every recorded count goes into the total, errored outcomes included.
    """

    def __init__(self) -> None:
        self._outcomes: list[ImportOutcome] = []
        self._total = 0

    def record(self, outcome: ImportOutcome) -> None:
        self._outcomes.append(outcome)
        self._total += outcome.imported_count

    @property
    def total_imported(self) -> int:
        return self._total

    def summary(self) -> ImportSummary:
        return ImportSummary(files=list(self._outcomes), total_imported=self._total)
