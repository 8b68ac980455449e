"""Database layer for the ledger kernel."""

from ledger_kernel.db.base import Base, TimestampedBase, UUIDString
from ledger_kernel.db.repository import LedgerRepository
from ledger_kernel.db.types import DecimalString, round_money, to_decimal

__all__ = [
    "Base",
    "TimestampedBase",
    "UUIDString",
    "LedgerRepository",
    "DecimalString",
    "round_money",
    "to_decimal",
]
