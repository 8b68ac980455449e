"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor for every write-side service in the
    kernel layer.  Services receive the ``LedgerRepository`` (storage
    collaborator) and an injectable ``Clock``.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Invariants enforced:
    - Transaction boundaries: each public mutating method stages its
      changes and ends with exactly one ``repository.save()``.  A
      ``StorageError`` from save leaves the session rolled back.
    - Timestamps come from the injected clock, never from the wall clock.
"""

from abc import ABC

from ledger_kernel.db.repository import LedgerRepository
from ledger_kernel.domain.clock import Clock, SystemClock


class BaseService(ABC):
    """
    Abstract base class for all kernel services.

    Non-goals:
        - Does NOT provide query-only (read) methods -- those belong
          in ``ledger_kernel/selectors/``.
    """

    def __init__(self, repository: LedgerRepository, clock: Clock | None = None):
        """
        Initialize the service.

        Args:
            repository: Storage collaborator wrapping an open session.
            clock: Time source; defaults to SystemClock.
        """
        self.repository = repository
        self.clock = clock or SystemClock()
