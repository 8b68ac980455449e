"""
Reporting Module Service (``ledger_modules.reporting.service``).

Responsibility
--------------
Orchestrates report generation -- balance sheet, profit & loss, trial
balance and journal -- by bridging kernel selectors (``LedgerSelector``,
``JournalSelector``) to the pure builders in ``statements.py``, and hands
finished documents to the serializers in ``export.py``.  This is a
**read-only** service: no journal entries are posted.

Architecture position
---------------------
**Modules layer** -- thin glue.  Constructor: ``repository`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to the ledger.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.
* Report metadata carries the generation timestamp from the injected clock.

Failure modes
-------------
* Unknown company  -> ``CompanyNotFoundError``.
* ``end_date`` before ``start_date``  -> ``ValueError`` raised before any
  query runs.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from ledger_kernel.config import LedgerConfig
from ledger_kernel.db.repository import LedgerRepository
from ledger_kernel.domain.balance import DateFilter
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.exceptions import CompanyNotFoundError
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.company import Company
from ledger_kernel.selectors.journal_selector import JournalFilter, JournalSelector
from ledger_kernel.selectors.ledger_selector import LedgerSelector

from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.export import ExportFormat, generate
from ledger_modules.reporting.models import ReportDocument, ReportMetadata, ReportType
from ledger_modules.reporting.statements import (
    build_balance_sheet,
    build_journal,
    build_profit_and_loss,
    build_trial_balance,
)

logger = get_logger("modules.reporting.service")


class ReportingService:
    """
    Report generation service.

    Contract
    --------
    * Every report method returns a ``ReportDocument``.
    * All methods are **read-only**.

    Guarantees
    ----------
    * Report generation delegates to pure builder functions in
      ``statements.py``; no accounting logic lives in this class.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._repository = repository
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._ledger = LedgerSelector(repository)
        self._journal = JournalSelector(repository)

    @classmethod
    def from_ledger_config(
        cls,
        repository: LedgerRepository,
        ledger_config: LedgerConfig,
        clock: Clock | None = None,
    ) -> ReportingService:
        """Build the service with formatting taken from ``ledger_config.reporting``."""
        return cls(
            repository,
            clock,
            ReportingConfig.from_dict(ledger_config.reporting),
        )

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _company_name(self, company_id: UUID) -> str:
        company = self._repository.get(Company, company_id)
        if company is None:
            raise CompanyNotFoundError(str(company_id))
        return company.name

    def _build_metadata(
        self,
        report_type: ReportType,
        company_id: UUID,
        as_of_date: date | None = None,
        period_start: date | None = None,
        period_end: date | None = None,
    ) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        return ReportMetadata(
            report_type=report_type,
            company_name=self._company_name(company_id),
            generated_at=self._clock.now().isoformat(),
            as_of_date=as_of_date,
            period_start=period_start,
            period_end=period_end,
        )

    # =========================================================================
    # Public API
    # =========================================================================

    def balance_sheet(self, company_id: UUID, as_of_date: date) -> ReportDocument:
        """
        Generate a balance sheet.

        Args:
            company_id: Company to report on.
            as_of_date: Only entries dated on or before this day count.
        """
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.BALANCE_SHEET.value,
        ):
            metadata = self._build_metadata(
                ReportType.BALANCE_SHEET, company_id, as_of_date=as_of_date,
            )
            date_filter = DateFilter.as_of(as_of_date)
            balances = self._ledger.account_balances(company_id, date_filter=date_filter)
            net_income = self._ledger.net_income(company_id, date_filter)

            report = build_balance_sheet(balances, net_income, metadata)

            logger.info(
                "balance_sheet_generated",
                extra={
                    "as_of_date": as_of_date.isoformat(),
                    "total_assets": str(report.value_of("Total Assets")),
                    "total_l_and_e": str(report.value_of("Total Liabilities & Equity")),
                },
            )
            return report

    def profit_and_loss(
        self,
        company_id: UUID,
        start_date: date,
        end_date: date,
    ) -> ReportDocument:
        """
        Generate a profit & loss statement.

        Both bounds are inclusive calendar days.

        Raises:
            ValueError: If end_date is before start_date.
        """
        date_filter = DateFilter.between(start_date, end_date)
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.PROFIT_AND_LOSS.value,
        ):
            metadata = self._build_metadata(
                ReportType.PROFIT_AND_LOSS,
                company_id,
                period_start=start_date,
                period_end=end_date,
            )
            balances = self._ledger.account_balances(company_id, date_filter=date_filter)

            report = build_profit_and_loss(balances, metadata)

            logger.info(
                "profit_and_loss_generated",
                extra={
                    "period_start": start_date.isoformat(),
                    "period_end": end_date.isoformat(),
                    "net_income": str(report.value_of("Net Income")),
                },
            )
            return report

    def trial_balance(self, company_id: UUID, as_of_date: date) -> ReportDocument:
        """
        Generate a trial balance.

        An imbalance between the column totals is reported in the document
        (``is_balanced`` is False) and logged as a warning; it is not raised.
        """
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.TRIAL_BALANCE.value,
        ):
            metadata = self._build_metadata(
                ReportType.TRIAL_BALANCE, company_id, as_of_date=as_of_date,
            )
            balances = self._ledger.account_balances(
                company_id, date_filter=DateFilter.as_of(as_of_date),
            )

            report = build_trial_balance(balances, metadata)

            extra = {
                "as_of_date": as_of_date.isoformat(),
                "line_count": len(report.sections[0].rows) - 1,
                "is_balanced": report.is_balanced,
            }
            if report.is_balanced:
                logger.info("trial_balance_generated", extra=extra)
            else:
                logger.warning("trial_balance_out_of_balance", extra=extra)
            return report

    def journal(
        self,
        company_id: UUID,
        journal_filter: JournalFilter | None = None,
    ) -> ReportDocument:
        """Generate a listing of journal entries matching the filter."""
        journal_filter = journal_filter or JournalFilter()
        with LogContext.bind(
            company_id=str(company_id),
            report_type=ReportType.JOURNAL.value,
        ):
            metadata = self._build_metadata(
                ReportType.JOURNAL,
                company_id,
                period_start=journal_filter.start_date,
                period_end=journal_filter.end_date,
            )
            entries = self._journal.entries(company_id, journal_filter)

            report = build_journal(entries, metadata)

            logger.info("journal_report_generated", extra={"entry_count": len(entries)})
            return report

    def export(self, report: ReportDocument, export_format: ExportFormat) -> bytes:
        """Serialize a report with this service's formatting options."""
        return generate(report, export_format, self._config)
