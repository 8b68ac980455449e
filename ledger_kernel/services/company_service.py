"""
CompanyService -- company lifecycle and the active-company selection.

Responsibility:
    Bootstraps the ledger on first run (default company, default chart of
    accounts, migration of pre-company data), creates/renames/deletes
    companies, and owns the process-wide "active company" selection.

Architecture position:
    Kernel > Services -- imperative shell.  Selection state is persisted
    through an injected SelectionStore; storage goes through the
    LedgerRepository.

Invariants enforced:
    - Every company created here starts with the 22-account default chart.
    - Bootstrap seeds at most once: the "already seeded" marker is set in
      the same run that seeds.
    - Unowned accounts and entries left from single-company data are
      attached to the default company instead of seeding a second chart.
    - The remembered active company is restored when it still exists;
      otherwise the first company by creation time becomes active.
    - Listeners registered with subscribe() are called after every change
      of the active company.

Failure modes:
    - CompanyNotFoundError when switching to or renaming a missing company.
    - InvalidCompanyNameError for blank names.
    - StorageError from save() propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import UUID

from ledger_kernel.db.repository import LedgerRepository
from ledger_kernel.domain.chart import DEFAULT_CHART, DEFAULT_COMPANY_NAME
from ledger_kernel.domain.clock import Clock
from ledger_kernel.exceptions import CompanyNotFoundError, InvalidCompanyNameError
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.account import Account
from ledger_kernel.models.company import Company
from ledger_kernel.models.journal import JournalEntry
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.selection_store import (
    ACTIVE_COMPANY_KEY,
    SEEDED_KEY,
    InMemorySelectionStore,
    SelectionStore,
)

logger = get_logger("services.company")


@dataclass(frozen=True)
class CompanyInfo:
    """Immutable DTO for company data."""

    id: UUID
    name: str
    created_at: datetime | None


ActiveCompanyListener = Callable[["CompanyInfo | None"], None]


def _to_dto(company: Company) -> CompanyInfo:
    return CompanyInfo(id=company.id, name=company.name, created_at=company.created_at)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidCompanyNameError(name)
    return cleaned


class CompanyService(BaseService):
    """
    Stateful service holding the active company.

    Contract:
        Call bootstrap() once at startup.  Afterwards ``active_company``
        is set unless every company has been deleted.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        selection_store: SelectionStore | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(repository, clock)
        self.selection_store = selection_store or InMemorySelectionStore()
        self._active: CompanyInfo | None = None
        self._listeners: list[ActiveCompanyListener] = []

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def active_company(self) -> CompanyInfo | None:
        return self._active

    @property
    def active_company_id(self) -> UUID | None:
        return self._active.id if self._active is not None else None

    def subscribe(self, callback: ActiveCompanyListener) -> Callable[[], None]:
        """
        Register a callback for active-company changes.

        Returns:
            A function that removes the callback.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set_active(self, company: CompanyInfo | None) -> None:
        previous = self._active
        self._active = company
        if company is None:
            self.selection_store.remove(ACTIVE_COMPANY_KEY)
        else:
            self.selection_store.set_string(ACTIVE_COMPANY_KEY, str(company.id))

        if previous != company:
            logger.info(
                "active_company_changed",
                extra={"company_id": str(company.id) if company else None},
            )
            for listener in list(self._listeners):
                listener(company)

    def switch_active_company(self, company_id: UUID) -> CompanyInfo:
        """
        Make a company the active one and persist the choice.

        Raises:
            CompanyNotFoundError: If the company doesn't exist.
        """
        company = self.repository.get(Company, company_id)
        if company is None:
            raise CompanyNotFoundError(str(company_id))
        info = _to_dto(company)
        self._set_active(info)
        return info

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _companies(self) -> list[Company]:
        return self.repository.fetch(
            Company, order_by=(Company.created_at, Company.name)
        )

    def list_companies(self) -> list[CompanyInfo]:
        """All companies, oldest first."""
        return [_to_dto(c) for c in self._companies()]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _seed_chart(self, company: Company) -> None:
        for name, account_type, sort_order in DEFAULT_CHART:
            account = Account(
                name=name,
                account_type=account_type,
                sort_order=sort_order,
            )
            account.company = company
            self.repository.insert(account)

    def _new_company(self, name: str, seed: bool) -> Company:
        company = Company(name=name, created_at=self.clock.now())
        self.repository.insert(company)
        if seed:
            self._seed_chart(company)
        return company

    def bootstrap(self) -> CompanyInfo:
        """
        Prepare the ledger for use and select the active company.

        With no companies in storage, a default company is created.  Any
        unowned accounts and entries are attached to it; otherwise it is
        seeded with the default chart.  The "already seeded" marker is set.

        Returns:
            The active company.
        """
        companies = self._companies()

        if not companies:
            orphan_accounts = self.repository.fetch(
                Account, Account.company_id.is_(None)
            )
            orphan_entries = self.repository.fetch(
                JournalEntry, JournalEntry.company_id.is_(None)
            )
            already_seeded = self.selection_store.get_bool(SEEDED_KEY)

            if orphan_accounts:
                company = self._new_company(DEFAULT_COMPANY_NAME, seed=False)
                for account in orphan_accounts:
                    account.company = company
                for entry in orphan_entries:
                    entry.company = company
                logger.info(
                    "orphan_data_migrated",
                    extra={
                        "account_count": len(orphan_accounts),
                        "entry_count": len(orphan_entries),
                    },
                )
            else:
                company = self._new_company(DEFAULT_COMPANY_NAME, seed=True)
                logger.info(
                    "default_chart_seeded",
                    extra={
                        "account_count": len(DEFAULT_CHART),
                        "previously_seeded": already_seeded,
                    },
                )

            self.repository.save()
            self.selection_store.set_bool(SEEDED_KEY, True)
            companies = [company]

        remembered = self.selection_store.get_string(ACTIVE_COMPANY_KEY)
        active = companies[0]
        if remembered:
            for company in companies:
                if str(company.id) == remembered:
                    active = company
                    break
            else:
                logger.warning(
                    "remembered_company_missing",
                    extra={"company_id": remembered},
                )

        info = _to_dto(active)
        self._set_active(info)
        logger.info("ledger_bootstrapped", extra={"company_count": len(companies)})
        return info

    def create_company(self, name: str) -> CompanyInfo:
        """
        Create a company with the default chart of accounts.

        The active selection is not changed.

        Raises:
            InvalidCompanyNameError: If the name is blank.
        """
        company = self._new_company(_clean_name(name), seed=True)
        self.repository.save()

        with LogContext.bind(company_id=str(company.id)):
            logger.info("company_created", extra={"company_name": company.name})
        return _to_dto(company)

    def rename_company(self, company_id: UUID, name: str) -> CompanyInfo:
        """
        Rename a company.

        Raises:
            InvalidCompanyNameError: If the name is blank.
            CompanyNotFoundError: If the company doesn't exist.
        """
        cleaned = _clean_name(name)
        company = self.repository.get(Company, company_id)
        if company is None:
            raise CompanyNotFoundError(str(company_id))

        company.name = cleaned
        self.repository.save()
        info = _to_dto(company)

        logger.info("company_renamed", extra={"company_id": str(company_id)})
        if self.active_company_id == company_id:
            self._set_active(info)
        return info

    def delete_company(self, company_id: UUID) -> bool:
        """
        Delete a company with its accounts, entries and lines.

        If it was active, the oldest remaining company becomes active, or
        the selection is cleared when none remain.  A missing id is a no-op.

        Returns:
            True if a company was deleted.
        """
        company = self.repository.get(Company, company_id)
        if company is None:
            return False

        # Collections may predate later commits; reload before cascading.
        self.repository.expire(company)
        self.repository.delete(company)
        self.repository.save()
        logger.info("company_deleted", extra={"company_id": str(company_id)})

        if self.active_company_id == company_id:
            remaining = self._companies()
            self._set_active(_to_dto(remaining[0]) if remaining else None)
        return True
