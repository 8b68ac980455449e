"""Domain models for the ledger kernel."""

from ledger_kernel.models.account import (
    NORMAL_BALANCE,
    Account,
    AccountType,
    NormalBalance,
)
from ledger_kernel.models.company import Company
from ledger_kernel.models.journal import JournalEntry, JournalEntryLine

__all__ = [
    "Account",
    "AccountType",
    "NormalBalance",
    "NORMAL_BALANCE",
    "Company",
    "JournalEntry",
    "JournalEntryLine",
]
