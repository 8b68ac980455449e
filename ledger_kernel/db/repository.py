"""
Module: ledger_kernel.db.repository
Responsibility: The storage collaborator consumed by selectors and services --
    insert, delete, save (commit), fetch-by-criteria.  Wraps one SQLAlchemy
    Session, which is the sole arbiter of write serialization.
Architecture position: Kernel > DB.  May import from db/ and exceptions only.

Invariants enforced:
    - save() is all-or-nothing: on failure the session is rolled back and a
      StorageError is raised, so a failed save is never mistaken for success.
    - fetch() only needs field equality/range criteria and ordering; callers
      pass SQLAlchemy column expressions.

Failure modes:
    - StorageError from save() wrapping any SQLAlchemyError.
"""

from typing import Any, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger_kernel.db.base import Base
from ledger_kernel.exceptions import StorageError
from ledger_kernel.logging_config import get_logger

logger = get_logger("db.repository")

ModelType = TypeVar("ModelType", bound=Base)


class LedgerRepository:
    """
    Repository over a SQLAlchemy session.

    Contract:
        Mutations are staged with insert()/delete() and made durable by a
        single save().  Nothing is committed implicitly.

    Guarantees:
        - save() commits or rolls back; never leaves a half-applied unit
          of work visible.
        - fetch() returns plain lists, ordered as requested.
    """

    def __init__(self, session: Session):
        self.session = session

    def insert(self, entity: Base) -> None:
        """Stage a new entity for persistence."""
        self.session.add(entity)

    def delete(self, entity: Base) -> None:
        """Stage an entity for deletion (ORM cascades apply)."""
        self.session.delete(entity)

    def flush(self) -> None:
        """Push staged changes to the database without committing."""
        self.session.flush()

    def save(self) -> None:
        """
        Commit all staged changes.

        Raises:
            StorageError: If the commit fails.  The session is rolled back.
        """
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(
                "storage_save_failed",
                extra={"error": type(exc).__name__},
                exc_info=True,
            )
            raise StorageError("save", str(exc)) from exc

    def rollback(self) -> None:
        """Discard all staged changes."""
        self.session.rollback()

    def expire(self, entity: Base) -> None:
        """Drop cached state so the next access reloads from the database."""
        self.session.expire(entity)

    def get(self, model: type[ModelType], entity_id: UUID) -> ModelType | None:
        """Fetch one entity by primary key, or None."""
        return self.session.get(model, entity_id)

    def fetch(
        self,
        model: type[ModelType],
        *criteria: Any,
        order_by: Sequence[Any] = (),
    ) -> list[ModelType]:
        """
        Fetch entities matching all criteria, in the given order.

        Args:
            model: ORM class to fetch.
            criteria: SQLAlchemy boolean expressions (ANDed).
            order_by: Column expressions to sort by.
        """
        stmt = select(model)
        if criteria:
            stmt = stmt.where(*criteria)
        if order_by:
            stmt = stmt.order_by(*order_by)
        return list(self.session.execute(stmt).scalars().all())
