"""
Module: ledger_kernel.db.types
Responsibility: Column types and helpers for exact monetary values.
    Centralizes precision and rounding so that every model, report and
    serializer uses identical definitions.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, selectors/ and the reporting module.  MUST NOT import from any
    of those layers.

Invariants enforced:
    - No floats anywhere in the ledger.  DecimalString persists Decimal as
      its canonical text so SQLite (which has no native decimal type) and
      PostgreSQL both round-trip amounts exactly.
    - round_money() is the ONLY sanctioned rounding function for display
      values.  Balances themselves are never rounded.

Failure modes:
    - decimal.InvalidOperation if a stored value is not a valid decimal
      string.
    - TypeError if a float is bound to a DecimalString column.
"""

from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP
ZERO = Decimal("0")


class DecimalString(TypeDecorator):
    """
    Decimal stored as String(64).

    Guarantees:
        - process_bind_param: Decimal/int/str -> canonical decimal text.
        - process_result_value: text -> Decimal, bit-for-bit what was stored.
        - float input is rejected rather than silently converted.
        - NaN and infinities are rejected.
    """

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, float):
            raise TypeError("float amounts are not accepted; use Decimal")
        amount = Decimal(value)
        if not amount.is_finite():
            raise ValueError(f"non-finite amount cannot be stored: {amount}")
        return str(amount)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def to_decimal(value: Decimal | int | str) -> Decimal:
    """
    Coerce user input to Decimal without passing through float.

    Raises:
        TypeError: If value is a float.
        decimal.InvalidOperation: If a string is not a valid number.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError("float amounts are not accepted; use Decimal")
    return Decimal(value)


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value for display.

    Postconditions: Returns value quantized to the given number of decimal
        places using the given rounding mode.
    """
    quantizer = Decimal(1).scaleb(-decimal_places)
    return value.quantize(quantizer, rounding=rounding)
