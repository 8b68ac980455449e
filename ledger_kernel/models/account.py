"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for the chart of accounts -- the target of
    every journal line -- plus the AccountType / NormalBalance vocabulary.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - NORMAL_BALANCE is a fixed, read-only table: asset/expense are
      debit-normal; liability/equity/revenue are credit-normal.  It is not
      stored per account and cannot be edited.
    - account_type may not change once the account has postings (enforced
      by AccountService.update_account, not here).
    - Deletion is refused while postings exist (AccountService).

Failure modes:
    - AccountNotFoundError when a posting references a non-existent account.
    - AccountReferencedError when deletion is attempted on a referenced account.
"""

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, UUIDString

if TYPE_CHECKING:
    from ledger_kernel.models.company import Company
    from ledger_kernel.models.journal import JournalEntryLine


class NormalBalance(str, Enum):
    """Side on which an account's balance is conventionally positive."""

    DEBIT = "debit"
    CREDIT = "credit"


class AccountType(str, Enum):
    """Types of accounts in the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @property
    def normal_balance(self) -> NormalBalance:
        return NORMAL_BALANCE[self]

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]


NORMAL_BALANCE: MappingProxyType = MappingProxyType(
    {
        AccountType.ASSET: NormalBalance.DEBIT,
        AccountType.EXPENSE: NormalBalance.DEBIT,
        AccountType.LIABILITY: NormalBalance.CREDIT,
        AccountType.EQUITY: NormalBalance.CREDIT,
        AccountType.REVENUE: NormalBalance.CREDIT,
    }
)

DISPLAY_NAMES: MappingProxyType = MappingProxyType(
    {
        AccountType.ASSET: "Assets",
        AccountType.LIABILITY: "Liabilities",
        AccountType.EQUITY: "Equity",
        AccountType.REVENUE: "Revenue",
        AccountType.EXPENSE: "Expenses",
    }
)


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Account(Base):
    """
    Chart of accounts entry.

    Contract:
        Belongs to exactly one Company.  company_id is nullable only for
        rows left over from the single-company era, which
        CompanyService.bootstrap() attaches to the default company.

    Guarantees:
        - account_type is one of the five AccountType members.
        - sort_order orders accounts within their type (ties by name).
    """

    __tablename__ = "accounts"

    __table_args__ = (
        Index("idx_account_company_type", "company_id", "account_type"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            native_enum=False,
            length=20,
            values_callable=_enum_values,
        ),
        nullable=False,
    )

    sort_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    company_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=True,
    )

    # Relationships
    company: Mapped["Company | None"] = relationship(
        back_populates="accounts",
    )

    # passive_deletes="all": the service refuses to delete accounts that
    # still have lines, so the ORM never nulls out line.account_id.
    lines: Mapped[list["JournalEntryLine"]] = relationship(
        back_populates="account",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Account {self.name} ({self.account_type.value})>"

    @property
    def normal_balance(self) -> NormalBalance:
        return self.account_type.normal_balance

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance == NormalBalance.DEBIT
