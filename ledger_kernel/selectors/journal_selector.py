"""
Module: ledger_kernel.selectors.journal_selector
Responsibility: Read-only query access to journal entries and their lines.
    Converts ORM models to frozen DTOs for clean layer separation.
Architecture position: Kernel > Selectors.  May import from models/ and
    selectors/base.py.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only: No mutations performed on any queried data.
    - DTO convention: All public methods return JournalEntryDTO/JournalLineDTO,
      never raw ORM models.
    - Lines are sorted by line_seq for deterministic ordering.
    - Listings are ordered by entry_date descending; entries on the same day
      are ordered most recently created first.

Failure modes:
    - find() returns None when no entry exists.
    - get() raises EntryNotFoundError when no entry exists.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ledger_kernel.db.types import ZERO
from ledger_kernel.exceptions import EntryNotFoundError
from ledger_kernel.models.journal import JournalEntry, JournalEntryLine
from ledger_kernel.selectors.base import BaseSelector


@dataclass(frozen=True)
class JournalFilter:
    """
    Conjunctive filters for journal listings.

    ``memo_contains`` is a case-insensitive substring match; ``start_date``
    and ``end_date`` are inclusive calendar days; ``account_id`` keeps only
    entries with at least one line posted to that account.
    """

    memo_contains: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    account_id: UUID | None = None


@dataclass(frozen=True)
class JournalLineDTO:
    """Data transfer object for a journal line."""

    id: UUID
    account_id: UUID
    account_name: str
    debit_amount: Decimal
    credit_amount: Decimal
    line_seq: int

    @property
    def is_debit(self) -> bool:
        return self.debit_amount > ZERO

    @property
    def amount(self) -> Decimal:
        return self.debit_amount if self.is_debit else self.credit_amount


@dataclass(frozen=True)
class JournalEntryDTO:
    """Data transfer object for a journal entry."""

    id: UUID
    company_id: UUID | None
    entry_date: date
    memo: str
    created_at: datetime | None
    lines: tuple[JournalLineDTO, ...] = field(default_factory=tuple)

    @property
    def total_debits(self) -> Decimal:
        """Sum of debit amounts."""
        return sum((line.debit_amount for line in self.lines), ZERO)

    @property
    def total_credits(self) -> Decimal:
        """Sum of credit amounts."""
        return sum((line.credit_amount for line in self.lines), ZERO)

    @property
    def is_balanced(self) -> bool:
        """Debits equal credits and both are positive."""
        return self.total_debits == self.total_credits and self.total_debits > ZERO

    @property
    def display_amount(self) -> Decimal:
        return self.total_debits


class JournalSelector(BaseSelector):
    """
    Selector for journal entry queries.

    Guarantees:
        - Read-only: No mutations are performed.
        - Eager loading: lines and their accounts are loaded via
          selectinload to avoid N+1 queries.

    Non-goals:
        - This selector does NOT compute balances; use LedgerSelector for that.
    """

    def _to_dto(self, entry: JournalEntry) -> JournalEntryDTO:
        """Convert ORM model to DTO."""
        lines = tuple(
            JournalLineDTO(
                id=line.id,
                account_id=line.account_id,
                account_name=line.account.name if line.account is not None else "",
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                line_seq=line.line_seq,
            )
            for line in sorted(entry.lines, key=lambda x: x.line_seq)
        )
        return JournalEntryDTO(
            id=entry.id,
            company_id=entry.company_id,
            entry_date=entry.entry_date,
            memo=entry.memo or "",
            created_at=entry.created_at,
            lines=lines,
        )

    def _base_query(self):
        return select(JournalEntry).options(
            selectinload(JournalEntry.lines).selectinload(JournalEntryLine.account)
        )

    def find(self, entry_id: UUID) -> JournalEntryDTO | None:
        """
        Get a journal entry by ID.

        Returns:
            JournalEntryDTO if found, None otherwise.
        """
        entry = self.session.execute(
            self._base_query().where(JournalEntry.id == entry_id)
        ).scalar_one_or_none()

        if entry is None:
            return None
        return self._to_dto(entry)

    def get(self, entry_id: UUID) -> JournalEntryDTO:
        """
        Get a journal entry by ID.

        Raises:
            EntryNotFoundError: If no entry exists with the given ID.
        """
        dto = self.find(entry_id)
        if dto is None:
            raise EntryNotFoundError(str(entry_id))
        return dto

    def entries(
        self,
        company_id: UUID,
        journal_filter: JournalFilter | None = None,
    ) -> list[JournalEntryDTO]:
        """
        List a company's journal entries, newest first.

        Args:
            company_id: Owning company.
            journal_filter: Optional conjunctive filters.

        Returns:
            List of JournalEntryDTOs (may be empty).
        """
        journal_filter = journal_filter or JournalFilter()

        query = (
            self._base_query()
            .where(JournalEntry.company_id == company_id)
            .order_by(JournalEntry.entry_date.desc(), JournalEntry.created_at.desc())
        )
        if journal_filter.start_date is not None:
            query = query.where(JournalEntry.entry_date >= journal_filter.start_date)
        if journal_filter.end_date is not None:
            query = query.where(JournalEntry.entry_date <= journal_filter.end_date)
        if journal_filter.account_id is not None:
            query = query.where(
                JournalEntry.lines.any(
                    JournalEntryLine.account_id == journal_filter.account_id
                )
            )

        rows = self.session.execute(query).scalars().all()

        # Unicode case folding, independent of backend collation.
        needle = (journal_filter.memo_contains or "").casefold()
        if needle:
            rows = [row for row in rows if needle in (row.memo or "").casefold()]

        return [self._to_dto(row) for row in rows]
