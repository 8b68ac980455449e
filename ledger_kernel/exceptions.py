"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of a bookkeeping engine must react to errors precisely: a refused
account deletion is shown to the user as a conflict, a storage failure is
surfaced as a failed save, a missing entry on delete is simply ignored.
Parsing message strings for that is fragile, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable)
  3. Exceptions carry structured DATA (not just a message string)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidAccountNameError
    |   +-- InvalidCompanyNameError
    |
    +-- CompanyError
    |   +-- CompanyNotFoundError
    |
    +-- AccountError
    |   +-- AccountNotFoundError
    |   +-- AccountReferencedError
    |   +-- AccountTypeLockedError
    |
    +-- EntryError
    |   +-- EntryNotFoundError
    |
    +-- StorageError

Journal entry posting does not raise for business-rule rejections; the
posting service returns a ``PostingResult`` with a rejection status (see
``ledger_kernel.services.posting_service``).  Only storage-layer failures
and programming errors escape as exceptions.

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                   | When Raised
------------|------------------------|------------------------------------------
Validation  | INVALID_ACCOUNT_NAME   | Blank account name on create/update
            | INVALID_COMPANY_NAME   | Blank company name on create/rename
------------|------------------------|------------------------------------------
Company     | COMPANY_NOT_FOUND      | Company ID doesn't exist
------------|------------------------|------------------------------------------
Account     | ACCOUNT_NOT_FOUND      | Account ID doesn't exist
            | ACCOUNT_REFERENCED     | Can't delete, account has postings
            | ACCOUNT_TYPE_LOCKED    | Can't change type, account has postings
------------|------------------------|------------------------------------------
Entry       | ENTRY_NOT_FOUND        | Journal entry ID doesn't exist (lookups)
------------|------------------------|------------------------------------------
Storage     | STORAGE_ERROR          | Commit failed; session rolled back
"""


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Validation exceptions


class ValidationError(LedgerKernelError):
    """Base exception for rejected input."""

    code: str = "VALIDATION_ERROR"


class InvalidAccountNameError(ValidationError):
    """Account name is empty after trimming whitespace."""

    code: str = "INVALID_ACCOUNT_NAME"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Account name must not be blank: {name!r}")


class InvalidCompanyNameError(ValidationError):
    """Company name is empty after trimming whitespace."""

    code: str = "INVALID_COMPANY_NAME"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Company name must not be blank: {name!r}")


# Company exceptions


class CompanyError(LedgerKernelError):
    """Base exception for company-related errors."""

    code: str = "COMPANY_ERROR"


class CompanyNotFoundError(CompanyError):
    """Company with given ID was not found."""

    code: str = "COMPANY_NOT_FOUND"

    def __init__(self, company_id: str):
        self.company_id = company_id
        super().__init__(f"Company not found: {company_id}")


# Account exceptions


class AccountError(LedgerKernelError):
    """Base exception for account-related errors."""

    code: str = "ACCOUNT_ERROR"


class AccountNotFoundError(AccountError):
    """Account with given ID was not found."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class AccountReferencedError(AccountError):
    """Account has postings and cannot be deleted."""

    code: str = "ACCOUNT_REFERENCED"

    def __init__(self, account_id: str, posting_count: int):
        self.account_id = account_id
        self.posting_count = posting_count
        super().__init__(
            f"Account {account_id} has {posting_count} posting(s) and cannot be deleted"
        )


class AccountTypeLockedError(AccountError):
    """Account type cannot change once the account has postings."""

    code: str = "ACCOUNT_TYPE_LOCKED"

    def __init__(self, account_id: str, current_type: str, requested_type: str):
        self.account_id = account_id
        self.current_type = current_type
        self.requested_type = requested_type
        super().__init__(
            f"Account {account_id} has postings; type cannot change "
            f"from {current_type} to {requested_type}"
        )


# Journal entry exceptions


class EntryError(LedgerKernelError):
    """Base exception for journal-entry-related errors."""

    code: str = "ENTRY_ERROR"


class EntryNotFoundError(EntryError):
    """Journal entry with given ID was not found."""

    code: str = "ENTRY_NOT_FOUND"

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Journal entry not found: {entry_id}")


# Storage exceptions


class StorageError(LedgerKernelError):
    """
    The storage collaborator failed to persist pending changes.

    The session has already been rolled back when this is raised; nothing
    from the failed unit of work should be treated as persisted.
    """

    code: str = "STORAGE_ERROR"

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Storage {operation} failed: {reason}")
