"""Author persistence."""

from typing import Sequence

from sqlalchemy import select

from app.models import Author
from app.repositories.base import SQLAlchemyRepository


class AuthorRepository(SQLAlchemyRepository[Author]):
    model = Author

    def find_all(self) -> Sequence[Author]:
        """Authors sorted by last name, then first name."""
        stmt = select(Author).order_by(Author.last_name, Author.first_name, Author.id)
        return self.db.execute(stmt).scalars().all()
