"""
Pytest fixtures for the ledger kernel test suite.

Provides:
- In-memory SQLite database sessions (fresh schema per test)
- Deterministic clock and in-memory selection state
- Services, selectors, and a seeded test company
- Captured structured logs

Environment Variables:
- LEDGER_TEST_DATABASE_URL: alternative database URL (e.g. a PostgreSQL
  test database).  Defaults to in-memory SQLite.
"""

import json
import logging
import os
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from ledger_kernel.config import PostingConfig
from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from ledger_kernel.db.repository import LedgerRepository
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.domain.posting import DraftLine
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.selectors.journal_selector import JournalSelector
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_kernel.services.account_service import AccountService
from ledger_kernel.services.company_service import CompanyService
from ledger_kernel.services.posting_service import PostingService
from ledger_kernel.services.selection_store import InMemorySelectionStore
from ledger_modules.reporting.service import ReportingService

DEFAULT_TEST_DATABASE_URL = "sqlite://"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, post):
            post(...)
            logs = captured_logs()
            assert any(r["message"] == "journal_entry_posted" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database
# =============================================================================


def get_database_url() -> str:
    return os.environ.get("LEDGER_TEST_DATABASE_URL", DEFAULT_TEST_DATABASE_URL)


@pytest.fixture
def db_engine():
    """Engine with a freshly created schema, torn down after the test."""
    engine = init_engine_from_url(get_database_url())
    create_tables()
    yield engine
    drop_tables()
    reset_engine()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    sess = get_session()
    try:
        yield sess
    finally:
        sess.close()


@pytest.fixture
def repository(session) -> LedgerRepository:
    return LedgerRepository(session)


# =============================================================================
# Clock and selection state
# =============================================================================


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(datetime(2024, 6, 1, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def selection_store() -> InMemorySelectionStore:
    return InMemorySelectionStore()


# =============================================================================
# Services and selectors
# =============================================================================


@pytest.fixture
def company_service(repository, selection_store, deterministic_clock) -> CompanyService:
    return CompanyService(repository, selection_store, deterministic_clock)


@pytest.fixture
def account_service(repository, deterministic_clock) -> AccountService:
    return AccountService(repository, deterministic_clock)


@pytest.fixture
def posting_service(repository, deterministic_clock) -> PostingService:
    return PostingService(
        repository, deterministic_clock, PostingConfig(require_memo=True)
    )


@pytest.fixture
def ledger_selector(repository) -> LedgerSelector:
    return LedgerSelector(repository)


@pytest.fixture
def journal_selector(repository) -> JournalSelector:
    return JournalSelector(repository)


@pytest.fixture
def reporting_service(repository, deterministic_clock) -> ReportingService:
    return ReportingService(repository, deterministic_clock)


# =============================================================================
# Test data
# =============================================================================


@pytest.fixture
def company(company_service):
    """A company seeded with the default chart of accounts."""
    return company_service.create_company("Test Co")


@pytest.fixture
def accounts(company, ledger_selector) -> dict:
    """The test company's accounts keyed by name."""
    return {a.name: a for a in ledger_selector.accounts(company.id)}


@pytest.fixture
def post(company, accounts, posting_service, deterministic_clock):
    """
    Post an entry by account name.

    Usage::

        result = post(date(2024, 1, 5), "Sale", ("Cash", "100", True), ("Sales Income", "100", False))

    The clock advances one second per call so creation order is stable.
    """

    def _post(entry_date: date, memo: str, *lines: tuple[str, str, bool], company_id=None):
        deterministic_clock.advance(1)
        drafts = [
            DraftLine(accounts[name].account_id, Decimal(amount), is_debit)
            for name, amount, is_debit in lines
        ]
        return posting_service.post_entry(
            company_id or company.id, entry_date, memo, drafts
        )

    return _post
