"""
Reporting Module (``ledger_modules.reporting``).

Responsibility
--------------
Read-only module that generates reports from the ledger -- balance sheet,
profit & loss, trial balance and journal listing -- and serializes them to
CSV or PDF.

Architecture position
---------------------
**Modules layer** -- read-only service.  All report construction is
implemented as pure functions in ``statements.py``.

Invariants enforced
-------------------
* No journal entries are created by this module.
* Reports derive entirely from journal lines (no stored balances).
"""

from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.export import (
    ExportFormat,
    format_currency,
    generate,
    parse_csv,
    render_csv,
    render_pdf,
    suggested_filename,
)
from ledger_modules.reporting.models import (
    ReportDocument,
    ReportMetadata,
    ReportRow,
    ReportSection,
    ReportType,
)
from ledger_modules.reporting.service import ReportingService

__all__ = [
    # Service
    "ReportingService",
    # Config
    "ReportingConfig",
    # Models
    "ReportType",
    "ReportMetadata",
    "ReportRow",
    "ReportSection",
    "ReportDocument",
    # Export
    "ExportFormat",
    "format_currency",
    "generate",
    "parse_csv",
    "render_csv",
    "render_pdf",
    "suggested_filename",
]
