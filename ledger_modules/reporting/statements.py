"""
Pure report builder functions.

These functions turn account balances and journal entries into
``ReportDocument`` values.  ZERO I/O. ZERO side effects.

All monetary values are Decimal. All inputs/outputs are frozen dataclasses.

Functions in this module follow the ledger_kernel/domain/ purity convention:
- No database access
- No clock access (the generation timestamp arrives in ReportMetadata)
- No file I/O
- Deterministic: same inputs always produce same outputs
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.balance import is_debit_column
from ledger_kernel.models.account import AccountType
from ledger_kernel.selectors.journal_selector import JournalEntryDTO
from ledger_kernel.selectors.ledger_selector import AccountBalance
from ledger_modules.reporting.models import (
    ReportDocument,
    ReportMetadata,
    ReportRow,
    ReportSection,
)

AMOUNT_COLUMNS = ("Amount",)
DEBIT_CREDIT_COLUMNS = ("Debit", "Credit")


# =========================================================================
# Helpers
# =========================================================================


def format_long_date(value: date) -> str:
    """January 5, 2024"""
    return f"{value:%B} {value.day}, {value.year}"


def format_medium_date(value: date) -> str:
    """Jan 5, 2024"""
    return f"{value:%b} {value.day}, {value.year}"


def as_of_subtitle(as_of_date: date, company_name: str) -> str:
    return f"As of {format_long_date(as_of_date)} - {company_name}"


def period_subtitle(start: date, end: date, company_name: str) -> str:
    return (
        f"{format_medium_date(start)} to {format_medium_date(end)} - {company_name}"
    )


def _total(balances: Sequence[AccountBalance]) -> Decimal:
    return sum((b.balance for b in balances), ZERO)


def _account_rows(
    balances: Sequence[AccountBalance],
    total_label: str,
) -> tuple[ReportRow, ...]:
    rows = [ReportRow(label=b.name, values=(b.balance,)) for b in balances]
    rows.append(ReportRow(label=total_label, values=(_total(balances),), is_total=True))
    return tuple(rows)


def _only(balances: Sequence[AccountBalance], account_type: AccountType) -> list[AccountBalance]:
    return [b for b in balances if b.account.account_type == account_type]


# =========================================================================
# 1. BALANCE SHEET
# =========================================================================


def build_balance_sheet(
    balances: Sequence[AccountBalance],
    net_income: Decimal,
    metadata: ReportMetadata,
) -> ReportDocument:
    """
    Build a balance sheet.

    Net income for the same cutoff appears as a synthetic equity row and
    is included in Total Equity:

        Total Equity = sum(equity balances) + net income
        Total Liabilities & Equity = total liabilities + Total Equity
    """
    assets = _only(balances, AccountType.ASSET)
    liabilities = _only(balances, AccountType.LIABILITY)
    equity = _only(balances, AccountType.EQUITY)

    total_equity = _total(equity) + net_income
    equity_rows = tuple(ReportRow(label=b.name, values=(b.balance,)) for b in equity) + (
        ReportRow(label="Net Income", values=(net_income,)),
        ReportRow(label="Total Equity", values=(total_equity,), is_total=True),
    )
    total_l_and_e = _total(liabilities) + total_equity

    sections = (
        ReportSection(
            title=AccountType.ASSET.display_name,
            rows=_account_rows(assets, "Total Assets"),
        ),
        ReportSection(
            title=AccountType.LIABILITY.display_name,
            rows=_account_rows(liabilities, "Total Liabilities"),
        ),
        ReportSection(title=AccountType.EQUITY.display_name, rows=equity_rows),
        ReportSection(
            title="",
            rows=(
                ReportRow(
                    label="Total Liabilities & Equity",
                    values=(total_l_and_e,),
                    is_total=True,
                ),
            ),
        ),
    )

    return ReportDocument(
        metadata=metadata,
        title="Balance Sheet",
        subtitle=as_of_subtitle(metadata.as_of_date, metadata.company_name),
        column_headers=AMOUNT_COLUMNS,
        sections=sections,
    )


# =========================================================================
# 2. PROFIT & LOSS
# =========================================================================


def build_profit_and_loss(
    balances: Sequence[AccountBalance],
    metadata: ReportMetadata,
) -> ReportDocument:
    """Build a profit & loss statement: revenue, expenses, net income."""
    revenue = _only(balances, AccountType.REVENUE)
    expenses = _only(balances, AccountType.EXPENSE)
    net_income = _total(revenue) - _total(expenses)

    sections = (
        ReportSection(
            title=AccountType.REVENUE.display_name,
            rows=_account_rows(revenue, "Total Revenue"),
        ),
        ReportSection(
            title=AccountType.EXPENSE.display_name,
            rows=_account_rows(expenses, "Total Expenses"),
        ),
        ReportSection(
            title="",
            rows=(ReportRow(label="Net Income", values=(net_income,), is_total=True),),
        ),
    )

    return ReportDocument(
        metadata=metadata,
        title="Profit & Loss",
        subtitle=period_subtitle(
            metadata.period_start, metadata.period_end, metadata.company_name,
        ),
        column_headers=AMOUNT_COLUMNS,
        sections=sections,
    )


# =========================================================================
# 3. TRIAL BALANCE
# =========================================================================


def trial_balance_row(balance: AccountBalance) -> ReportRow:
    """
    Place an account's absolute balance in the debit or credit column.

    The other cell is blank (None).
    """
    amount = abs(balance.balance)
    if is_debit_column(balance.account.normal_balance, balance.balance):
        return ReportRow(label=balance.name, values=(amount, None))
    return ReportRow(label=balance.name, values=(None, amount))


def build_trial_balance(
    balances: Sequence[AccountBalance],
    metadata: ReportMetadata,
) -> ReportDocument:
    """
    Build a trial balance.

    Zero-balance accounts are omitted.  The closing "Totals" row sums each
    column independently; unequal totals are reported, never raised.
    """
    rows = [trial_balance_row(b) for b in balances if b.balance != ZERO]
    total_debits = sum((r.values[0] for r in rows if r.values[0] is not None), ZERO)
    total_credits = sum((r.values[1] for r in rows if r.values[1] is not None), ZERO)
    rows.append(
        ReportRow(label="Totals", values=(total_debits, total_credits), is_total=True)
    )

    return ReportDocument(
        metadata=metadata,
        title="Trial Balance",
        subtitle=as_of_subtitle(metadata.as_of_date, metadata.company_name),
        column_headers=DEBIT_CREDIT_COLUMNS,
        sections=(ReportSection(title="Accounts", rows=tuple(rows)),),
    )


# =========================================================================
# 4. JOURNAL
# =========================================================================


def journal_subtitle(
    start: date | None,
    end: date | None,
    company_name: str,
) -> str:
    if start is not None and end is not None:
        return period_subtitle(start, end, company_name)
    if start is not None:
        return f"From {format_medium_date(start)} - {company_name}"
    if end is not None:
        return f"Through {format_medium_date(end)} - {company_name}"
    return f"All dates - {company_name}"


def build_journal(
    entries: Sequence[JournalEntryDTO],
    metadata: ReportMetadata,
) -> ReportDocument:
    """One row per entry, labelled "<ISO date> <memo>", with its totals."""
    rows = [
        ReportRow(
            label=f"{entry.entry_date.isoformat()} {entry.memo}".rstrip(),
            values=(entry.total_debits, entry.total_credits),
        )
        for entry in entries
    ]
    rows.append(
        ReportRow(
            label="Totals",
            values=(
                sum((e.total_debits for e in entries), ZERO),
                sum((e.total_credits for e in entries), ZERO),
            ),
            is_total=True,
        )
    )

    return ReportDocument(
        metadata=metadata,
        title="Journal",
        subtitle=journal_subtitle(
            metadata.period_start, metadata.period_end, metadata.company_name,
        ),
        column_headers=DEBIT_CREDIT_COLUMNS,
        sections=(ReportSection(title="Entries", rows=tuple(rows)),),
    )
