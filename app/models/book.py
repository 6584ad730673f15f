"""
Book Model

The central model of the BookStore API, representing books on sale.

Each book optionally points at the author who wrote it (books.author_id).
The relationship is a plain foreign key: a Book references its Author but
does not own it, and an Author only looks its books up.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.author import Author


class Book(Base):
    """
    Book model representing books in the store.

    Table: books

    Fields:
    - title: Book title (required)
    - year: Year of publication
    - isbn: International Standard Book Number (unique when present)
    - summary: Short description of the book
    - image: File name of the cover image
    - author_id: Foreign key to authors.id

    Example:
        book = Book(
            title="1984",
            year=1949,
            isbn="9780451524935",
            author_id=orwell.id,
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of publication"
    )

    # Two editions never share an ISBN; older books may not have one
    isbn: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        nullable=True,
        comment="International Standard Book Number"
    )

    summary: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book summary"
    )

    image: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="File name of the cover image"
    )

    author_id: Mapped[int | None] = mapped_column(
        ForeignKey("authors.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
        comment="Author who wrote the book"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author | None"] = relationship(
        "Author",
        back_populates="books",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"
