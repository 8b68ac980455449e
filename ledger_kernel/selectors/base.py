"""
Module: ledger_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.
    Selectors form the "Q" side of the ledger: structured read access with
    no mutation capability.
Architecture position: Kernel > Selectors.  May import from db/ and models/.
    MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: selectors never call insert/delete/save/flush on the
      repository.
    - DTO return convention: selectors return frozen dataclasses or computed
      results, NOT ORM instances.
    - Each public call runs to completion against the rows fetched at call
      time; the caller owns the session and its transaction scope.
"""

from abc import ABC

from ledger_kernel.db.repository import LedgerRepository


class BaseSelector(ABC):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept the LedgerRepository from the caller, perform
        read-only queries, and return DTOs or computed results.
    """

    def __init__(self, repository: LedgerRepository):
        self.repository = repository
        self.session = repository.session
