"""Write-side services for the ledger kernel."""

from ledger_kernel.services.account_service import AccountService
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.company_service import CompanyInfo, CompanyService
from ledger_kernel.services.posting_service import (
    PostingResult,
    PostingService,
    PostingStatus,
)
from ledger_kernel.services.selection_store import (
    ACTIVE_COMPANY_KEY,
    SEEDED_KEY,
    InMemorySelectionStore,
    JsonFileSelectionStore,
    SelectionStore,
)

__all__ = [
    "AccountService",
    "BaseService",
    "CompanyInfo",
    "CompanyService",
    "PostingResult",
    "PostingService",
    "PostingStatus",
    "ACTIVE_COMPANY_KEY",
    "SEEDED_KEY",
    "InMemorySelectionStore",
    "JsonFileSelectionStore",
    "SelectionStore",
]
