"""Read-only query selectors for the ledger kernel."""

from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.journal_selector import (
    JournalEntryDTO,
    JournalFilter,
    JournalLineDTO,
    JournalSelector,
)
from ledger_kernel.selectors.ledger_selector import (
    AccountBalance,
    AccountInfo,
    LedgerSelector,
)

__all__ = [
    "BaseSelector",
    "JournalEntryDTO",
    "JournalFilter",
    "JournalLineDTO",
    "JournalSelector",
    "AccountBalance",
    "AccountInfo",
    "LedgerSelector",
]
