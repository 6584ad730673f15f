"""
Book Pydantic Schemas

- BookCreate: POST body, never carries an id
- BookUpdate: PUT body, carries the id of the book being replaced
- BookResponse: what GET returns, with the author embedded
"""

from pydantic import BaseModel, Field, field_validator

from app.database import MAX_ID
from app.schemas.summary import CAMEL_CONFIG, CAMEL_ORM_CONFIG, AuthorSummary


class BookBase(BaseModel):
    """
    Base schema with shared book fields.

    Only the title is required. author_id is the owning author; whether
    that author exists is left to the database's foreign key.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    year: int | None = Field(
        default=None,
        ge=0,
        le=9999,
        description="Year of publication",
        examples=[1949, 1813],
    )

    isbn: str | None = Field(
        default=None,
        max_length=20,
        description="International Standard Book Number",
        examples=["9780451524935"],
    )

    summary: str | None = Field(
        default=None,
        max_length=500,
        description="Short summary of the book",
        examples=["A dystopian novel set in a totalitarian society..."],
    )

    image: str | None = Field(
        default=None,
        max_length=255,
        description="File name of the cover image",
        examples=["1984.jpg"],
    )

    author_id: int | None = Field(
        default=None,
        gt=0,
        le=MAX_ID,
        description="Identifier of the author who wrote the book",
        examples=[1],
    )

    model_config = CAMEL_CONFIG

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Validate and normalize title."""
        if not v.strip():
            raise ValueError("Title cannot be empty or whitespace")
        return v.strip()

    @field_validator("isbn")
    @classmethod
    def strip_isbn(cls, v: str | None) -> str | None:
        """Store ISBNs without surrounding whitespace; blank means none."""
        if v is None:
            return v
        return v.strip() or None


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "year": 1949,
        "isbn": "9780451524935",
        "authorId": 1
    }
    """
    pass


class BookUpdate(BookBase):
    """
    Schema for replacing an existing book (PUT semantics).

    Optional fields left out of the body are cleared.
    """

    id: int = Field(
        ...,
        gt=0,
        description="Identifier of the book being updated",
        examples=[1],
    )


class BookResponse(BookBase):
    """Schema for book responses."""

    id: int = Field(
        ...,
        description="Unique identifier",
        examples=[1, 42],
    )

    author: AuthorSummary | None = Field(
        default=None,
        description="Author who wrote the book",
    )

    model_config = CAMEL_ORM_CONFIG
