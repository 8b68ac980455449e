"""Tests for validate_draft -- the pure gate in front of the posting service."""

from decimal import Decimal
from uuid import uuid4

import pytest

from ledger_kernel.domain.posting import DraftLine, RejectionReason, validate_draft

CASH = uuid4()
SALES = uuid4()
FEES = uuid4()


def line(account, amount, is_debit):
    return DraftLine(account, Decimal(amount), is_debit)


class TestAccepted:
    def test_simple_balanced_draft(self):
        result = validate_draft(
            "Sale", [line(CASH, "100", True), line(SALES, "100", False)]
        )
        assert result.is_valid
        assert result.total_debits == Decimal("100")
        assert result.total_credits == Decimal("100")
        assert len(result.lines) == 2

    def test_split_draft(self):
        result = validate_draft(
            "Sale with fee",
            [
                line(CASH, "95", True),
                line(FEES, "5", True),
                line(SALES, "100", False),
            ],
        )
        assert result.is_valid

    def test_placeholders_are_dropped(self):
        result = validate_draft(
            "Sale",
            [
                line(CASH, "100", True),
                line(None, "50", True),
                line(FEES, "0", True),
                line(SALES, "100", False),
            ],
        )
        assert result.is_valid
        assert [l.account_id for l in result.lines] == [CASH, SALES]

    def test_string_and_int_amounts_coerced(self):
        result = validate_draft(
            "Sale", [DraftLine(CASH, "10.50", True), DraftLine(SALES, Decimal("10.5"), False)]
        )
        assert result.is_valid
        assert all(isinstance(l.amount, Decimal) for l in result.lines)

    def test_memo_optional_when_not_required(self):
        result = validate_draft(
            "  ", [line(CASH, "1", True), line(SALES, "1", False)], require_memo=False
        )
        assert result.is_valid


class TestRejected:
    def test_unbalanced(self):
        result = validate_draft(
            "Sale", [line(CASH, "100", True), line(SALES, "90", False)]
        )
        assert result.reason == RejectionReason.UNBALANCED
        assert not result.is_valid

    def test_single_line(self):
        result = validate_draft("Sale", [line(CASH, "100", True)])
        assert result.reason == RejectionReason.INSUFFICIENT_LINES

    def test_only_placeholders(self):
        result = validate_draft(
            "Sale", [line(None, "100", True), line(SALES, "0", False)]
        )
        assert result.reason == RejectionReason.INSUFFICIENT_LINES

    def test_debits_only(self):
        result = validate_draft(
            "Sale", [line(CASH, "100", True), line(FEES, "100", True)]
        )
        assert result.reason == RejectionReason.ZERO_TOTAL

    def test_negative_amount(self):
        result = validate_draft(
            "Refund",
            [line(CASH, "-100", True), line(SALES, "-100", False)],
        )
        assert result.reason == RejectionReason.NEGATIVE_AMOUNT

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity", "sNaN"])
    def test_non_finite_amount(self, amount):
        result = validate_draft(
            "Sale", [line(CASH, amount, True), line(SALES, amount, False)]
        )
        assert result.reason == RejectionReason.INVALID_AMOUNT
        assert not result.is_valid

    def test_non_finite_beats_negative(self):
        result = validate_draft(
            "Sale", [line(CASH, "-5", True), line(SALES, "Infinity", False)]
        )
        assert result.reason == RejectionReason.INVALID_AMOUNT

    def test_non_finite_placeholder_without_account_is_dropped(self):
        result = validate_draft(
            "Sale",
            [line(CASH, "1", True), line(None, "NaN", True), line(SALES, "1", False)],
        )
        assert result.is_valid

    @pytest.mark.parametrize("memo", ["", "   ", "\n"])
    def test_blank_memo(self, memo):
        result = validate_draft(
            memo, [line(CASH, "1", True), line(SALES, "1", False)]
        )
        assert result.reason == RejectionReason.MISSING_MEMO

    def test_float_amount_rejected(self):
        with pytest.raises(TypeError):
            validate_draft("x", [DraftLine(CASH, 1.5, True), line(SALES, "1.5", False)])

    def test_rejection_carries_message(self):
        result = validate_draft(
            "Sale", [line(CASH, "100", True), line(SALES, "90", False)]
        )
        assert "100" in result.message and "90" in result.message
