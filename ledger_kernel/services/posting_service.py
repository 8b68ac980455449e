"""
PostingService -- validates and commits journal entries.

Responsibility:
    Turns a user-composed draft (date, memo, lines) into a persisted
    JournalEntry with its JournalEntryLines, or refuses it with a
    machine-readable status.  Also deletes entries.

Architecture position:
    Kernel > Services -- imperative shell.  Validation is delegated to the
    pure ``validate_draft`` in ``ledger_kernel.domain.posting``.

Invariants enforced:
    - Rejected drafts cause no side effect: every check runs before the
      first insert.
    - An accepted draft is written all-or-nothing: the entry and its lines
      are staged together and made durable by a single save().
    - Two-way references: each line is attached to its entry and its
      account in the same step that creates it.
    - Every line account belongs to the entry's company.

Failure modes:
    - Business-rule refusals return a PostingResult with a rejection status.
    - A failed save returns STORAGE_FAILED; the session has been rolled back
      and nothing from the attempt is persisted.
    - delete_entry propagates StorageError (hard failure).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Sequence
from uuid import UUID

from ledger_kernel.config import PostingConfig
from ledger_kernel.db.repository import LedgerRepository
from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.posting import DraftLine, validate_draft
from ledger_kernel.exceptions import StorageError
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.account import Account
from ledger_kernel.models.company import Company
from ledger_kernel.models.journal import JournalEntry
from ledger_kernel.services.base import BaseService

logger = get_logger("services.posting")


class PostingStatus(str, Enum):
    """Status of a posting operation."""

    POSTED = "posted"
    INSUFFICIENT_LINES = "insufficient_lines"
    INVALID_AMOUNT = "invalid_amount"
    NEGATIVE_AMOUNT = "negative_amount"
    UNBALANCED = "unbalanced"
    ZERO_TOTAL = "zero_total"
    MISSING_MEMO = "missing_memo"
    INVALID_ACCOUNT = "invalid_account"
    COMPANY_NOT_FOUND = "company_not_found"
    STORAGE_FAILED = "storage_failed"


@dataclass(frozen=True)
class PostingResult:
    """Result of a posting operation."""

    status: PostingStatus
    entry_id: UUID | None = None
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == PostingStatus.POSTED


class PostingService(BaseService):
    """
    Posts and deletes journal entries.

    Contract:
        post_entry() never raises for a bad draft; it returns a
        PostingResult whose status says why posting was refused.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        clock: Clock | None = None,
        config: PostingConfig | None = None,
    ):
        super().__init__(repository, clock)
        self.config = config or PostingConfig()

    def _reject(self, status: PostingStatus, message: str) -> PostingResult:
        logger.info(
            "journal_entry_rejected",
            extra={"status": status.value, "reason": message},
        )
        return PostingResult(status=status, message=message)

    def post_entry(
        self,
        company_id: UUID,
        entry_date: date,
        memo: str,
        lines: Sequence[DraftLine],
    ) -> PostingResult:
        """
        Validate a draft and persist it as a journal entry.

        Placeholder lines (no account, or a zero amount) are discarded
        before validation.

        Args:
            company_id: Company that will own the entry.
            entry_date: Accounting date of the entry.
            memo: Free-text description.
            lines: Draft lines as entered.

        Returns:
            PostingResult with status POSTED and the new entry_id, or a
            rejection status and a human-readable message.
        """
        with LogContext.bind(company_id=str(company_id)):
            company = self.repository.get(Company, company_id)
            if company is None:
                return self._reject(
                    PostingStatus.COMPANY_NOT_FOUND,
                    f"Company not found: {company_id}",
                )

            validation = validate_draft(
                memo, lines, require_memo=self.config.require_memo
            )
            if not validation.is_valid:
                return self._reject(
                    PostingStatus(validation.reason.value),
                    validation.message or "",
                )

            accounts: dict[UUID, Account] = {}
            for line in validation.lines:
                if line.account_id in accounts:
                    continue
                account = self.repository.get(Account, line.account_id)
                if account is None or account.company_id != company_id:
                    return self._reject(
                        PostingStatus.INVALID_ACCOUNT,
                        f"Account {line.account_id} is not available to this company.",
                    )
                accounts[line.account_id] = account

            entry = JournalEntry(
                entry_date=entry_date,
                memo=memo.strip(),
                created_at=self.clock.now(),
            )
            entry.company = company
            for line in validation.lines:
                entry.add_line(
                    accounts[line.account_id],
                    debit_amount=line.amount if line.is_debit else ZERO,
                    credit_amount=ZERO if line.is_debit else line.amount,
                )
            self.repository.insert(entry)

            try:
                self.repository.save()
            except StorageError as exc:
                logger.error(
                    "journal_entry_storage_failed",
                    extra={"reason": exc.reason},
                )
                return PostingResult(
                    status=PostingStatus.STORAGE_FAILED,
                    message=str(exc),
                )

            logger.info(
                "journal_entry_posted",
                extra={
                    "entry_id": str(entry.id),
                    "entry_date": entry_date.isoformat(),
                    "line_count": len(validation.lines),
                    "total": str(validation.total_debits),
                },
            )
            return PostingResult(status=PostingStatus.POSTED, entry_id=entry.id)

    def delete_entry(self, entry_id: UUID) -> bool:
        """
        Delete an entry and its lines.

        Deleting an id that does not exist is a no-op.

        Returns:
            True if an entry was deleted, False if none existed.

        Raises:
            StorageError: If the delete cannot be committed.
        """
        with LogContext.bind(entry_id=str(entry_id)):
            entry = self.repository.get(JournalEntry, entry_id)
            if entry is None:
                logger.debug("journal_entry_delete_noop")
                return False

            self.repository.delete(entry)
            self.repository.save()
            logger.info("journal_entry_deleted")
            return True
