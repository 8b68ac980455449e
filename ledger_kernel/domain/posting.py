"""
Draft validation for journal entries -- pure.

Responsibility:
    Decide whether a user-composed draft may become a persisted journal
    entry.  The posting service calls ``validate_draft`` before touching
    storage, so a rejected draft never causes a side effect.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - A postable draft has >= 2 usable lines (account chosen, amount > 0).
    - Total debits == total credits and both are > 0.
    - No line carries a negative or non-finite amount.
    - The memo is non-blank when ``require_memo`` is set.

Placeholder lines (no account chosen, or amount exactly zero) are the
normal by-product of an entry form and are dropped before the checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Sequence
from uuid import UUID

from ledger_kernel.db.types import ZERO, to_decimal

MIN_LINES = 2


class RejectionReason(str, Enum):
    """Why a draft entry was refused."""

    INSUFFICIENT_LINES = "insufficient_lines"
    INVALID_AMOUNT = "invalid_amount"
    NEGATIVE_AMOUNT = "negative_amount"
    UNBALANCED = "unbalanced"
    ZERO_TOTAL = "zero_total"
    MISSING_MEMO = "missing_memo"


@dataclass(frozen=True)
class DraftLine:
    """One line of an uncommitted entry, as entered by the user."""

    account_id: UUID | None
    amount: Decimal
    is_debit: bool

    @property
    def is_placeholder(self) -> bool:
        return self.account_id is None or self.amount == ZERO


@dataclass(frozen=True)
class DraftValidation:
    """Outcome of validate_draft."""

    lines: tuple[DraftLine, ...]
    total_debits: Decimal
    total_credits: Decimal
    reason: RejectionReason | None = None
    message: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.reason is None


def _reject(
    lines: tuple[DraftLine, ...],
    debits: Decimal,
    credits: Decimal,
    reason: RejectionReason,
    message: str,
) -> DraftValidation:
    return DraftValidation(lines, debits, credits, reason, message)


def validate_draft(
    memo: str,
    lines: Sequence[DraftLine],
    require_memo: bool = True,
) -> DraftValidation:
    """
    Validate a draft entry.

    Returns:
        DraftValidation whose ``lines`` are the usable lines (placeholders
        removed, amounts coerced to Decimal) and whose ``reason`` is None
        when the draft may be posted.
    """
    coerced = tuple(
        DraftLine(line.account_id, to_decimal(line.amount), line.is_debit)
        for line in lines
    )
    usable = tuple(line for line in coerced if not line.is_placeholder)

    # NaN and infinities cannot be ordered or summed safely.
    if any(not l.amount.is_finite() for l in usable):
        return _reject(
            usable, ZERO, ZERO,
            RejectionReason.INVALID_AMOUNT,
            "Line amounts must be finite numbers.",
        )

    debits = sum((l.amount for l in usable if l.is_debit), ZERO)
    credits = sum((l.amount for l in usable if not l.is_debit), ZERO)

    if any(l.amount < ZERO for l in usable):
        return _reject(
            usable, debits, credits,
            RejectionReason.NEGATIVE_AMOUNT,
            "Line amounts must be positive.",
        )

    if len(usable) < MIN_LINES:
        return _reject(
            usable, debits, credits,
            RejectionReason.INSUFFICIENT_LINES,
            "Please add at least two line items with amounts.",
        )

    if debits == ZERO or credits == ZERO:
        return _reject(
            usable, debits, credits,
            RejectionReason.ZERO_TOTAL,
            "An entry needs both a debit and a credit.",
        )

    if debits != credits:
        return _reject(
            usable, debits, credits,
            RejectionReason.UNBALANCED,
            f"Debits ({debits}) must equal credits ({credits}).",
        )

    if require_memo and not memo.strip():
        return _reject(
            usable, debits, credits,
            RejectionReason.MISSING_MEMO,
            "Please enter a memo for this entry.",
        )

    return DraftValidation(usable, debits, credits)
