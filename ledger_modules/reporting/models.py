"""
Report Document Models (``ledger_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects for report output.  Every report -- balance
sheet, profit & loss, trial balance, journal -- is the same generic shape:
a document with column headers and ordered sections of labelled rows.  The
serializers in ``export.py`` only ever see this shape.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary values are ``Decimal`` -- NEVER ``float``.  ``None`` marks a
  blank cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class ReportType(str, Enum):
    """Types of reports."""

    BALANCE_SHEET = "balance_sheet"
    PROFIT_AND_LOSS = "profit_and_loss"
    TRIAL_BALANCE = "trial_balance"
    JOURNAL = "journal"


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every report."""

    report_type: ReportType
    company_name: str
    generated_at: str  # ISO format timestamp from injected clock
    as_of_date: date | None = None
    period_start: date | None = None
    period_end: date | None = None


@dataclass(frozen=True)
class ReportRow:
    """One labelled line; ``is_total`` rows render bold with a rule beneath."""

    label: str
    values: tuple[Decimal | None, ...]
    is_total: bool = False


@dataclass(frozen=True)
class ReportSection:
    """A titled group of rows.  An empty title renders no heading."""

    title: str
    rows: tuple[ReportRow, ...]

    def find_row(self, label: str) -> ReportRow | None:
        for row in self.rows:
            if row.label == label:
                return row
        return None


@dataclass(frozen=True)
class ReportDocument:
    """A complete report, ready for serialization."""

    metadata: ReportMetadata
    title: str
    subtitle: str
    column_headers: tuple[str, ...]
    sections: tuple[ReportSection, ...]

    @property
    def report_type(self) -> ReportType:
        return self.metadata.report_type

    def section(self, title: str) -> ReportSection | None:
        for section in self.sections:
            if section.title == title:
                return section
        return None

    def find_row(self, label: str) -> ReportRow | None:
        """First row with the given label across all sections."""
        for section in self.sections:
            row = section.find_row(label)
            if row is not None:
                return row
        return None

    def value_of(self, label: str, column: int = 0) -> Decimal | None:
        row = self.find_row(label)
        if row is None or column >= len(row.values):
            return None
        return row.values[column]

    @property
    def is_balanced(self) -> bool | None:
        """
        Column self-check for two-column reports (trial balance, journal).

        True when the closing "Totals" row has equal debit and credit
        columns; None when the report has no such row.
        """
        totals = self.find_row("Totals")
        if totals is None or len(totals.values) != 2:
            return None
        return totals.values[0] == totals.values[1]
