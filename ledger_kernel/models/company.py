"""
Module: ledger_kernel.models.company
Responsibility: ORM persistence for companies -- the owner of a chart of
    accounts and a journal.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - Cascading ownership: deleting a Company deletes its Accounts and
      JournalEntries (and, through the entries, their lines).
    - "Active company" is selection state held by CompanyService, not a
      column here.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import TimestampedBase

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account
    from ledger_kernel.models.journal import JournalEntry


class Company(TimestampedBase):
    """A bookkeeping entity with its own accounts and journal."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    accounts: Mapped[list["Account"]] = relationship(
        back_populates="company",
        cascade="all, delete-orphan",
    )

    journal_entries: Mapped[list["JournalEntry"]] = relationship(
        back_populates="company",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Company {self.name}>"
