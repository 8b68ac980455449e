"""
Reporting-specific test fixtures.

Provides:
- A small set of books (January and February 2024) posted through the
  real posting service
- Synthetic report metadata and balances for pure builder tests
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from ledger_kernel.models.account import AccountType
from ledger_kernel.selectors.ledger_selector import AccountBalance, AccountInfo

from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import ReportMetadata, ReportType


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig.with_defaults()


@pytest.fixture
def books(post):
    """
    January:
        Owner invests 1,000 cash; 500 sale; 200 meals; 300 loan.
    February:
        150 advertising income; 80 software.

    As of Jan 31: assets 1,600 / liabilities 300 / equity 1,000 / NI 300.
    """
    post(date(2024, 1, 1), "Owner investment", ("Cash", "1000", True), ("Owner's Equity", "1000", False))
    post(date(2024, 1, 10), "Website sale", ("Cash", "500", True), ("Sales Income", "500", False))
    post(date(2024, 1, 20), "Team lunch", ("Meals", "200", True), ("Cash", "200", False))
    post(date(2024, 1, 31), "Bank loan", ("Cash", "300", True), ("Loan Payable", "300", False))
    post(date(2024, 2, 1), "Ad revenue", ("Checking", "150", True), ("Advertising Income", "150", False))
    post(date(2024, 2, 15), "Software", ("Software/Subscriptions", "80", True), ("Checking", "80", False))


# =========================================================================
# Synthetic data for pure function tests (no DB required)
# =========================================================================


def make_balance(name: str, account_type: AccountType, balance: str, sort_order: int = 1) -> AccountBalance:
    """Factory for AccountBalance used in pure tests."""
    return AccountBalance(
        account=AccountInfo(
            account_id=uuid4(),
            name=name,
            account_type=account_type,
            sort_order=sort_order,
            company_id=None,
        ),
        balance=Decimal(balance),
    )


def make_metadata(report_type: ReportType, **kwargs) -> ReportMetadata:
    return ReportMetadata(
        report_type=report_type,
        company_name="Pure Co",
        generated_at="2024-06-01T09:00:00+00:00",
        **kwargs,
    )
