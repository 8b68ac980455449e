"""
Balance calculator -- pure aggregation of line postings into a signed balance.

Responsibility:
    Turns an account's postings into a balance under a date filter, honoring
    the account type's normal-balance sign convention.

Architecture position:
    Kernel > Domain -- pure functional core.  No database access, no clock,
    no I/O.  Selectors adapt ORM rows into ``LinePosting`` values before
    calling in here.

Invariants enforced:
    - Debit-normal: contribution = debit - credit.
    - Credit-normal: contribution = credit - debit.
      A normal-side increase is positive; an abnormal posting is negative
      (contra balance).  The same convention is used by every report.
    - Date filters compare calendar dates and are inclusive at both ends.
    - No rounding: results are exact Decimal sums.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable

from ledger_kernel.db.types import ZERO
from ledger_kernel.models.account import NormalBalance


class DateFilterKind(str, Enum):
    UNBOUNDED = "unbounded"
    AS_OF = "as_of"
    RANGE = "range"


@dataclass(frozen=True)
class DateFilter:
    """
    Which postings count toward a balance.

    Build with ``DateFilter.unbounded()``, ``DateFilter.as_of(d)`` or
    ``DateFilter.between(start, end)``.
    """

    kind: DateFilterKind
    start: date | None = None
    end: date | None = None

    @classmethod
    def unbounded(cls) -> DateFilter:
        return cls(DateFilterKind.UNBOUNDED)

    @classmethod
    def as_of(cls, as_of_date: date) -> DateFilter:
        """Postings dated on or before ``as_of_date``."""
        return cls(DateFilterKind.AS_OF, end=as_of_date)

    @classmethod
    def between(cls, start: date, end: date) -> DateFilter:
        """
        Postings dated from ``start`` through ``end``, both inclusive.

        Raises:
            ValueError: If start is after end.
        """
        if start > end:
            raise ValueError(f"Range start {start} is after end {end}")
        return cls(DateFilterKind.RANGE, start=start, end=end)

    def includes(self, entry_date: date) -> bool:
        if self.kind == DateFilterKind.UNBOUNDED:
            return True
        if self.kind == DateFilterKind.AS_OF:
            return entry_date <= self.end
        return self.start <= entry_date <= self.end


@dataclass(frozen=True)
class LinePosting:
    """The part of a journal line the calculator needs."""

    entry_date: date
    debit_amount: Decimal
    credit_amount: Decimal


def compute_natural_balance(
    debit_total: Decimal,
    credit_total: Decimal,
    normal_balance: NormalBalance,
) -> Decimal:
    """
    Compute balance adjusted for normal balance side.

    DEBIT-normal (ASSET, EXPENSE): balance = debit_total - credit_total
    CREDIT-normal (LIABILITY, EQUITY, REVENUE): balance = credit_total - debit_total
    """
    if normal_balance == NormalBalance.DEBIT:
        return debit_total - credit_total
    return credit_total - debit_total


def balance_of(
    normal_balance: NormalBalance,
    postings: Iterable[LinePosting],
    date_filter: DateFilter | None = None,
) -> Decimal:
    """
    Sum the signed contributions of every posting the filter admits.

    Args:
        normal_balance: The account's normal side.
        postings: All postings to the account (any order).
        date_filter: Defaults to unbounded.

    Returns:
        Exact Decimal balance; zero for no qualifying postings.
    """
    date_filter = date_filter or DateFilter.unbounded()
    debit_total = ZERO
    credit_total = ZERO
    for posting in postings:
        if date_filter.includes(posting.entry_date):
            debit_total += posting.debit_amount
            credit_total += posting.credit_amount
    return compute_natural_balance(debit_total, credit_total, normal_balance)


def is_debit_column(normal_balance: NormalBalance, balance: Decimal) -> bool:
    """
    Trial balance column for a natural balance.

    A debit-normal account with a non-negative balance, or a credit-normal
    account with a negative (contra) balance, sits in the debit column.
    """
    if normal_balance == NormalBalance.DEBIT:
        return balance >= ZERO
    return balance < ZERO
