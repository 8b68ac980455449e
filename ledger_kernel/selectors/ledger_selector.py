"""
Module: ledger_kernel.selectors.ledger_selector
Responsibility: Read-only ledger queries -- accounts by type, account
    balances under a date filter, totals by account type, and net income.
    The ledger is a derived view over JournalEntryLines; there are no stored
    balances anywhere in the system.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/balance.py and selectors/base.py.

Invariants enforced:
    - Every balance is computed at query time by the pure balance
      calculator (domain/balance.py) from the lines fetched by this call.
    - Accounts are ordered by sort_order, then name.
    - net_income = total(revenue) - total(expense) under the same filter.

Failure modes:
    - Returns empty results or zero balances when nothing matches.
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select

from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.balance import DateFilter, LinePosting, balance_of
from ledger_kernel.models.account import Account, AccountType, NormalBalance
from ledger_kernel.models.journal import JournalEntry, JournalEntryLine
from ledger_kernel.selectors.base import BaseSelector

_TYPE_ORDER = {account_type: index for index, account_type in enumerate(AccountType)}


@dataclass(frozen=True)
class AccountInfo:
    """Snapshot of an account."""

    account_id: UUID
    name: str
    account_type: AccountType
    sort_order: int
    company_id: UUID | None

    @property
    def normal_balance(self) -> NormalBalance:
        return self.account_type.normal_balance


@dataclass(frozen=True)
class AccountBalance:
    """An account and its natural balance under some date filter."""

    account: AccountInfo
    balance: Decimal

    @property
    def name(self) -> str:
        return self.account.name


def to_account_info(account: Account) -> AccountInfo:
    return AccountInfo(
        account_id=account.id,
        name=account.name,
        account_type=account.account_type,
        sort_order=account.sort_order,
        company_id=account.company_id,
    )


class LedgerSelector(BaseSelector):
    """
    Selector for balance queries -- the authoritative balance read path.

    Guarantees:
        - All balance methods return Decimal (never float).
        - Results reflect one consistent fetch per call.
    """

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def accounts_by_type(
        self,
        company_id: UUID,
        account_type: AccountType,
    ) -> list[AccountInfo]:
        """Accounts of one type for a company, by sort_order then name."""
        rows = self.repository.fetch(
            Account,
            Account.company_id == company_id,
            Account.account_type == account_type,
            order_by=(Account.sort_order, Account.name),
        )
        return [to_account_info(row) for row in rows]

    def accounts(self, company_id: UUID) -> list[AccountInfo]:
        """All accounts for a company, grouped by type in chart order."""
        rows = self.repository.fetch(Account, Account.company_id == company_id)
        infos = [to_account_info(row) for row in rows]
        return sorted(
            infos,
            key=lambda a: (_TYPE_ORDER[a.account_type], a.sort_order, a.name),
        )

    def posting_count(self, account_id: UUID) -> int:
        """Number of journal lines posted to the account."""
        stmt = select(func.count(JournalEntryLine.id)).where(
            JournalEntryLine.account_id == account_id
        )
        return int(self.session.execute(stmt).scalar_one())

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def _postings(
        self,
        account_ids: list[UUID],
        date_filter: DateFilter,
    ) -> dict[UUID, list[LinePosting]]:
        """Fetch postings for the given accounts, pre-filtered by date."""
        result: dict[UUID, list[LinePosting]] = defaultdict(list)
        if not account_ids:
            return result

        stmt = (
            select(
                JournalEntryLine.account_id,
                JournalEntry.entry_date,
                JournalEntryLine.debit_amount,
                JournalEntryLine.credit_amount,
            )
            .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
            .where(JournalEntryLine.account_id.in_(account_ids))
        )
        if date_filter.start is not None:
            stmt = stmt.where(JournalEntry.entry_date >= date_filter.start)
        if date_filter.end is not None:
            stmt = stmt.where(JournalEntry.entry_date <= date_filter.end)

        for account_id, entry_date, debit, credit in self.session.execute(stmt):
            result[account_id].append(LinePosting(entry_date, debit, credit))
        return result

    def balance_of(
        self,
        account: AccountInfo,
        date_filter: DateFilter | None = None,
    ) -> Decimal:
        """Natural balance of one account."""
        date_filter = date_filter or DateFilter.unbounded()
        postings = self._postings([account.account_id], date_filter)
        return balance_of(
            account.normal_balance,
            postings.get(account.account_id, []),
            date_filter,
        )

    def account_balances(
        self,
        company_id: UUID,
        account_type: AccountType | None = None,
        date_filter: DateFilter | None = None,
    ) -> list[AccountBalance]:
        """
        Balances for a company's accounts, optionally of one type.

        Ordering matches accounts_by_type / accounts.
        """
        date_filter = date_filter or DateFilter.unbounded()
        if account_type is None:
            infos = self.accounts(company_id)
        else:
            infos = self.accounts_by_type(company_id, account_type)

        postings = self._postings([a.account_id for a in infos], date_filter)
        return [
            AccountBalance(
                account=info,
                balance=balance_of(
                    info.normal_balance,
                    postings.get(info.account_id, []),
                    date_filter,
                ),
            )
            for info in infos
        ]

    def total_for_type(
        self,
        company_id: UUID,
        account_type: AccountType,
        date_filter: DateFilter | None = None,
    ) -> Decimal:
        """Sum of natural balances over every account of the type."""
        return sum(
            (b.balance for b in self.account_balances(company_id, account_type, date_filter)),
            ZERO,
        )

    def net_income(
        self,
        company_id: UUID,
        date_filter: DateFilter | None = None,
    ) -> Decimal:
        """Revenue minus expenses."""
        revenue = self.total_for_type(company_id, AccountType.REVENUE, date_filter)
        expenses = self.total_for_type(company_id, AccountType.EXPENSE, date_filter)
        return revenue - expenses
