"""Pure domain logic for the ledger kernel (no I/O)."""

from ledger_kernel.domain.balance import (
    DateFilter,
    DateFilterKind,
    LinePosting,
    balance_of,
    compute_natural_balance,
    is_debit_column,
)
from ledger_kernel.domain.chart import DEFAULT_CHART, DEFAULT_COMPANY_NAME
from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.posting import (
    DraftLine,
    DraftValidation,
    RejectionReason,
    validate_draft,
)

__all__ = [
    "DateFilter",
    "DateFilterKind",
    "LinePosting",
    "balance_of",
    "compute_natural_balance",
    "is_debit_column",
    "DEFAULT_CHART",
    "DEFAULT_COMPANY_NAME",
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "DraftLine",
    "DraftValidation",
    "RejectionReason",
    "validate_draft",
]
