"""Book persistence."""

from app.models import Book
from app.repositories.base import SQLAlchemyRepository


class BookRepository(SQLAlchemyRepository[Book]):
    model = Book
