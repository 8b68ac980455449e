"""
CompanyService: bootstrap, lifecycle, and the active-company selection.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from ledger_kernel.domain.chart import DEFAULT_COMPANY_NAME
from ledger_kernel.exceptions import CompanyNotFoundError, InvalidCompanyNameError
from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.models.journal import JournalEntry, JournalEntryLine
from ledger_kernel.services.company_service import CompanyService
from ledger_kernel.services.selection_store import (
    ACTIVE_COMPANY_KEY,
    SEEDED_KEY,
    InMemorySelectionStore,
)


def _count(session, column) -> int:
    return session.execute(select(func.count(column))).scalar_one()


class TestBootstrap:
    def test_first_run_seeds_default_company(
        self, company_service, ledger_selector, selection_store
    ):
        active = company_service.bootstrap()

        assert active.name == DEFAULT_COMPANY_NAME
        assert company_service.active_company == active
        assert len(ledger_selector.accounts(active.id)) == 22
        assert selection_store.get_bool(SEEDED_KEY) is True
        assert selection_store.get_string(ACTIVE_COMPANY_KEY) == str(active.id)

    def test_second_bootstrap_does_not_reseed(self, company_service, session):
        company_service.bootstrap()
        company_service.bootstrap()
        assert len(company_service.list_companies()) == 1
        assert _count(session, Account.id) == 22

    def test_restores_remembered_company(
        self, repository, deterministic_clock, company_service
    ):
        company_service.bootstrap()
        deterministic_clock.advance(60)
        second = company_service.create_company("Second Co")
        company_service.switch_active_company(second.id)

        # A restart: fresh service, same storage and selection state.
        restarted = CompanyService(
            repository, company_service.selection_store, deterministic_clock
        )
        assert restarted.bootstrap().id == second.id

    def test_missing_remembered_company_falls_back_to_first(
        self, repository, deterministic_clock, captured_logs
    ):
        store = InMemorySelectionStore({ACTIVE_COMPANY_KEY: str(uuid4())})
        service = CompanyService(repository, store, deterministic_clock)
        first = service.bootstrap()
        deterministic_clock.advance(60)
        service.create_company("Later Co")

        restarted = CompanyService(repository, store, deterministic_clock)
        store.set_string(ACTIVE_COMPANY_KEY, str(uuid4()))
        assert restarted.bootstrap().id == first.id
        assert any(
            r["message"] == "remembered_company_missing" for r in captured_logs()
        )

    def test_orphan_data_is_migrated_instead_of_seeding(
        self, session, company_service, ledger_selector, journal_selector
    ):
        cash = Account(name="Cash", account_type=AccountType.ASSET, sort_order=1)
        sales = Account(name="Sales", account_type=AccountType.REVENUE, sort_order=1)
        entry = JournalEntry(entry_date=date(2023, 12, 1), memo="Legacy sale")
        entry.add_line(cash, debit_amount=Decimal("42"))
        entry.add_line(sales, credit_amount=Decimal("42"))
        session.add_all([cash, sales, entry])
        session.commit()

        active = company_service.bootstrap()

        assert [a.name for a in ledger_selector.accounts(active.id)] == ["Cash", "Sales"]
        assert [e.memo for e in journal_selector.entries(active.id)] == ["Legacy sale"]
        assert _count(session, Account.id) == 2

    def test_seeded_marker_without_companies_still_creates_default(
        self, repository, deterministic_clock, ledger_selector
    ):
        store = InMemorySelectionStore({SEEDED_KEY: True})
        service = CompanyService(repository, store, deterministic_clock)
        active = service.bootstrap()
        assert len(ledger_selector.accounts(active.id)) == 22

    def test_bootstrap_notifies_listeners(self, company_service):
        seen = []
        company_service.subscribe(seen.append)
        active = company_service.bootstrap()
        assert seen == [active]


class TestLifecycle:
    def test_create_company_seeds_chart_without_switching(
        self, company_service, ledger_selector
    ):
        company_service.bootstrap()
        before = company_service.active_company_id
        created = company_service.create_company("  Acme LLC  ")

        assert created.name == "Acme LLC"
        assert company_service.active_company_id == before
        assert len(ledger_selector.accounts(created.id)) == 22

    def test_created_at_from_clock(self, company_service, deterministic_clock):
        created = company_service.create_company("Acme")
        assert created.created_at == deterministic_clock.now()

    def test_list_companies_oldest_first(self, company_service, deterministic_clock):
        company_service.create_company("Beta")
        deterministic_clock.advance(10)
        company_service.create_company("Alpha")
        assert [c.name for c in company_service.list_companies()] == ["Beta", "Alpha"]

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, company_service, name):
        with pytest.raises(InvalidCompanyNameError):
            company_service.create_company(name)

    def test_rename(self, company_service, company):
        renamed = company_service.rename_company(company.id, " Renamed Co ")
        assert renamed.name == "Renamed Co"
        assert company_service.list_companies()[0].name == "Renamed Co"

    def test_rename_active_company_notifies(self, company_service, company):
        company_service.switch_active_company(company.id)
        seen = []
        company_service.subscribe(seen.append)
        company_service.rename_company(company.id, "New Name")
        assert [c.name for c in seen] == ["New Name"]
        assert company_service.active_company.name == "New Name"

    def test_rename_missing_company(self, company_service):
        with pytest.raises(CompanyNotFoundError):
            company_service.rename_company(uuid4(), "Anything")

    def test_delete_company_cascades(self, post, company, company_service, session):
        post(date(2024, 1, 5), "Sale", ("Cash", "10", True), ("Sales Income", "10", False))

        assert company_service.delete_company(company.id) is True

        assert company_service.list_companies() == []
        assert _count(session, Account.id) == 0
        assert _count(session, JournalEntry.id) == 0
        assert _count(session, JournalEntryLine.id) == 0

    def test_delete_leaves_other_companies_alone(
        self, company, company_service, deterministic_clock, ledger_selector
    ):
        deterministic_clock.advance(10)
        other = company_service.create_company("Other Co")
        company_service.delete_company(company.id)
        assert [c.id for c in company_service.list_companies()] == [other.id]
        assert len(ledger_selector.accounts(other.id)) == 22

    def test_delete_active_switches_to_first_remaining(
        self, company_service, deterministic_clock
    ):
        first = company_service.bootstrap()
        deterministic_clock.advance(10)
        second = company_service.create_company("Second")
        deterministic_clock.advance(10)
        company_service.create_company("Third")

        company_service.switch_active_company(second.id)
        company_service.delete_company(second.id)
        assert company_service.active_company_id == first.id

    def test_delete_last_company_clears_selection(self, company_service, selection_store):
        only = company_service.bootstrap()
        company_service.delete_company(only.id)
        assert company_service.active_company is None
        assert selection_store.get_string(ACTIVE_COMPANY_KEY) is None

    def test_delete_missing_company_is_noop(self, company_service):
        assert company_service.delete_company(uuid4()) is False


class TestActiveSelection:
    def test_switch_persists_and_notifies(self, company_service, selection_store, company):
        seen = []
        company_service.subscribe(seen.append)
        info = company_service.switch_active_company(company.id)

        assert company_service.active_company == info
        assert selection_store.get_string(ACTIVE_COMPANY_KEY) == str(company.id)
        assert seen == [info]

    def test_switch_to_same_company_does_not_renotify(self, company_service, company):
        company_service.switch_active_company(company.id)
        seen = []
        company_service.subscribe(seen.append)
        company_service.switch_active_company(company.id)
        assert seen == []

    def test_switch_to_missing_company(self, company_service):
        with pytest.raises(CompanyNotFoundError):
            company_service.switch_active_company(uuid4())

    def test_unsubscribe(self, company_service, company):
        seen = []
        unsubscribe = company_service.subscribe(seen.append)
        unsubscribe()
        company_service.switch_active_company(company.id)
        assert seen == []

    def test_switch_is_logged(self, company_service, company, captured_logs):
        company_service.switch_active_company(company.id)
        changed = [r for r in captured_logs() if r["message"] == "active_company_changed"]
        assert changed[-1]["company_id"] == str(company.id)
