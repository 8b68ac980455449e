"""
Module: ledger_kernel.models.journal
Responsibility: ORM persistence for journal entries and journal entry lines --
    the single source of financial truth.  There are no stored balances.
Architecture position: Kernel > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - A persisted JournalEntry is balanced and has at least two lines.
      Enforcement lives in the posting service (validate_draft); the
      is_balanced property here is a read-side convenience.
    - Each line is either a debit posting or a credit posting: exactly one
      of debit_amount / credit_amount is positive, the other is zero.
    - Deleting an entry deletes its lines (cascade).

Failure modes:
    - IntegrityError if a line is flushed without an entry or account.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, TimestampedBase, UUIDString
from ledger_kernel.db.types import ZERO, DecimalString

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account
    from ledger_kernel.models.company import Company


class JournalEntry(TimestampedBase):
    """
    Journal entry header -- the atomic unit of double-entry accounting.

    Guarantees:
        - total_debits / total_credits / is_balanced / display_amount are
          derived from lines on every access, never stored.
        - lines are ordered by line_seq.
    """

    __tablename__ = "journal_entries"

    __table_args__ = (
        Index("idx_journal_company_date", "company_id", "entry_date"),
    )

    # Accounting date; calendar day with no time-of-day component
    entry_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    memo: Mapped[str] = mapped_column(
        String(1000),
        default="",
        nullable=False,
    )

    company_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=True,
    )

    # Relationships
    company: Mapped["Company | None"] = relationship(
        back_populates="journal_entries",
    )

    lines: Mapped[list["JournalEntryLine"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalEntryLine.line_seq",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<JournalEntry {self.id} {self.entry_date} {self.memo!r}>"

    def add_line(
        self,
        account: "Account",
        debit_amount: Decimal = ZERO,
        credit_amount: Decimal = ZERO,
    ) -> "JournalEntryLine":
        """Create a line bound to this entry and the account in one step."""
        line = JournalEntryLine(
            account=account,
            debit_amount=debit_amount,
            credit_amount=credit_amount,
            line_seq=len(self.lines),
        )
        # back_populates wires entry.lines and line.entry together
        line.entry = self
        return line

    @property
    def total_debits(self) -> Decimal:
        return sum((line.debit_amount for line in self.lines), ZERO)

    @property
    def total_credits(self) -> Decimal:
        return sum((line.credit_amount for line in self.lines), ZERO)

    @property
    def is_balanced(self) -> bool:
        """Debits equal credits and the entry moves a non-zero amount."""
        debits = self.total_debits
        return debits == self.total_credits and debits > ZERO

    @property
    def display_amount(self) -> Decimal:
        return self.total_debits


class JournalEntryLine(Base):
    """
    Individual debit or credit posting within a journal entry.

    Guarantees:
        - debit_amount and credit_amount are non-negative; exactly one is
          positive on every persisted line.
    """

    __tablename__ = "journal_entry_lines"

    __table_args__ = (
        Index("idx_line_entry", "journal_entry_id"),
        Index("idx_line_account", "account_id"),
    )

    journal_entry_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journal_entries.id"),
        nullable=False,
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    debit_amount: Mapped[Decimal] = mapped_column(
        DecimalString(),
        default=ZERO,
        nullable=False,
    )

    credit_amount: Mapped[Decimal] = mapped_column(
        DecimalString(),
        default=ZERO,
        nullable=False,
    )

    # Position within the entry (deterministic ordering)
    line_seq: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    # Relationships
    entry: Mapped["JournalEntry"] = relationship(
        back_populates="lines",
    )

    account: Mapped["Account"] = relationship(
        back_populates="lines",
    )

    def __repr__(self) -> str:
        side = "DR" if self.is_debit else "CR"
        return f"<JournalEntryLine {side} {self.amount}>"

    @property
    def amount(self) -> Decimal:
        return self.debit_amount if self.debit_amount > ZERO else self.credit_amount

    @property
    def is_debit(self) -> bool:
        return self.debit_amount > ZERO
