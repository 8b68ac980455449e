"""
Service layer for chart-of-accounts maintenance.

Creates, edits, and deletes accounts within a company.  An account that
has postings keeps its type and cannot be deleted.

Returns AccountInfo DTOs instead of ORM entities.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select

from ledger_kernel.exceptions import (
    AccountNotFoundError,
    AccountReferencedError,
    AccountTypeLockedError,
    CompanyNotFoundError,
    InvalidAccountNameError,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.models.company import Company
from ledger_kernel.selectors.ledger_selector import AccountInfo, LedgerSelector, to_account_info
from ledger_kernel.services.base import BaseService

logger = get_logger("services.account")


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidAccountNameError(name)
    return cleaned


class AccountService(BaseService):
    """
    Service for managing accounts.

    All public methods return AccountInfo DTOs, not ORM Account entities.
    """

    def _get_by_id(self, account_id: UUID) -> Account:
        """Get account by ID, raising if not found."""
        account = self.repository.get(Account, account_id)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account

    def _next_sort_order(self, company_id: UUID, account_type: AccountType) -> int:
        stmt = select(func.max(Account.sort_order)).where(
            Account.company_id == company_id,
            Account.account_type == account_type,
        )
        current = self.repository.session.execute(stmt).scalar_one_or_none()
        return (current or 0) + 1

    def has_postings(self, account_id: UUID) -> bool:
        """Whether any journal line references the account."""
        return LedgerSelector(self.repository).posting_count(account_id) > 0

    def create_account(
        self,
        company_id: UUID,
        name: str,
        account_type: AccountType,
        sort_order: int | None = None,
    ) -> AccountInfo:
        """
        Add an account to a company's chart.

        Args:
            company_id: Owning company.
            name: Display name (whitespace trimmed, must be non-blank).
            account_type: One of the five account types.
            sort_order: Position within the type; defaults to one past the
                current maximum for that type.

        Raises:
            InvalidAccountNameError: If the name is blank.
            CompanyNotFoundError: If the company doesn't exist.
        """
        cleaned = _clean_name(name)
        account_type = AccountType(account_type)
        if self.repository.get(Company, company_id) is None:
            raise CompanyNotFoundError(str(company_id))

        if sort_order is None:
            sort_order = self._next_sort_order(company_id, account_type)

        account = Account(
            name=cleaned,
            account_type=account_type,
            sort_order=sort_order,
            company_id=company_id,
        )
        self.repository.insert(account)
        self.repository.save()

        logger.info(
            "account_created",
            extra={
                "account_id": str(account.id),
                "company_id": str(company_id),
                "account_type": account_type.value,
            },
        )
        return to_account_info(account)

    def update_account(
        self,
        account_id: UUID,
        name: str | None = None,
        account_type: AccountType | None = None,
        sort_order: int | None = None,
    ) -> AccountInfo:
        """
        Edit an account.  Arguments left as None are unchanged.

        Raises:
            AccountNotFoundError: If the account doesn't exist.
            InvalidAccountNameError: If a blank name is given.
            AccountTypeLockedError: If the type would change on an account
                that already has postings.
        """
        account = self._get_by_id(account_id)

        cleaned = _clean_name(name) if name is not None else None

        if account_type is not None:
            account_type = AccountType(account_type)
            if account_type != account.account_type and self.has_postings(account_id):
                raise AccountTypeLockedError(
                    str(account_id),
                    account.account_type.value,
                    account_type.value,
                )

        if cleaned is not None:
            account.name = cleaned
        if account_type is not None:
            account.account_type = account_type
        if sort_order is not None:
            account.sort_order = sort_order

        self.repository.save()
        logger.info("account_updated", extra={"account_id": str(account_id)})
        return to_account_info(account)

    def delete_account(self, account_id: UUID) -> bool:
        """
        Delete an account that has no postings.

        Deleting an id that does not exist is a no-op.

        Returns:
            True if deleted, False if no such account existed.

        Raises:
            AccountReferencedError: If the account has postings.  Nothing
                is changed.
        """
        account = self.repository.get(Account, account_id)
        if account is None:
            return False

        posting_count = LedgerSelector(self.repository).posting_count(account_id)
        if posting_count > 0:
            logger.warning(
                "account_delete_refused",
                extra={"account_id": str(account_id), "posting_count": posting_count},
            )
            raise AccountReferencedError(str(account_id), posting_count)

        self.repository.delete(account)
        self.repository.save()
        logger.info("account_deleted", extra={"account_id": str(account_id)})
        return True
