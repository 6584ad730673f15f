"""
Repository Contract

The persistence operations the request handlers depend on, independent of
the storage technology.

Write operations (create/update/delete) report their outcome as a bool
instead of raising: False means the store refused or failed the write,
and the handler turns that into a generic 500. The cause has already been
logged by the repository by the time False is returned.

SQLAlchemyRepository implements the contract on top of a request-scoped
Session; AuthorRepository and BookRepository only name their model.
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import MAX_ID, Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RepositoryBase(ABC, Generic[ModelT]):
    """Abstract single-entity repository."""

    @abstractmethod
    def find_all(self) -> Sequence[ModelT]:
        """Return every record."""

    @abstractmethod
    def find_by_id(self, entity_id: int) -> ModelT | None:
        """Return the record with this id, or None."""

    @abstractmethod
    def is_exists(self, entity_id: int) -> bool:
        """Check whether a record with this id exists."""

    @abstractmethod
    def create(self, entity: ModelT) -> bool:
        """Insert a new record; the store assigns entity.id."""

    @abstractmethod
    def update(self, entity: ModelT) -> bool:
        """Replace the stored record that has entity.id."""

    @abstractmethod
    def delete(self, entity: ModelT) -> bool:
        """Remove the record."""


class SQLAlchemyRepository(RepositoryBase[ModelT]):
    """
    Repository backed by a SQLAlchemy Session.

    Subclasses set `model`. Each write commits on its own, since no
    operation touches more than one entity.

    Example:
        class AuthorRepository(SQLAlchemyRepository[Author]):
            model = Author

        repo = AuthorRepository(db)
        repo.create(Author(first_name="Jane", last_name="Austen"))
    """

    model: type[ModelT]

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_all(self) -> Sequence[ModelT]:
        stmt = select(self.model).order_by(self.model.id)
        return self.db.execute(stmt).scalars().all()

    def find_by_id(self, entity_id: int) -> ModelT | None:
        if not self._storable(entity_id):
            return None
        return self.db.get(self.model, entity_id)

    def is_exists(self, entity_id: int) -> bool:
        if not self._storable(entity_id):
            return False
        stmt = select(exists().where(self.model.id == entity_id))
        return bool(self.db.execute(stmt).scalar())

    def create(self, entity: ModelT) -> bool:
        self.db.add(entity)
        if not self.save():
            return False
        self.db.refresh(entity)
        return True

    def update(self, entity: ModelT) -> bool:
        self.db.merge(entity)
        return self.save()

    def delete(self, entity: ModelT) -> bool:
        self.db.delete(entity)
        return self.save()

    @staticmethod
    def _storable(entity_id: int) -> bool:
        """Ids outside the INTEGER column range cannot be stored, so never exist."""
        return 0 < entity_id <= MAX_ID

    def save(self) -> bool:
        """
        Commit pending changes.

        Returns:
            True if the commit succeeded; False after rolling back a
            commit the database rejected (constraint violation, lost
            connection, ...).
        """
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"{self.model.__name__} commit failed, rolled back")
            return False
        return True
