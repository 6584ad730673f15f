"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

- AuthorCreate: POST body, never carries an id
- AuthorUpdate: PUT body, carries the id of the author being replaced
- AuthorResponse: what GET returns, including the author's books
"""

from pydantic import BaseModel, Field, field_validator

from app.schemas.summary import CAMEL_CONFIG, CAMEL_ORM_CONFIG, BookSummary


class AuthorBase(BaseModel):
    """
    Base schema with shared author fields.

    first_name and last_name are required; whitespace is stripped and a
    name made only of whitespace is rejected.
    """

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's first name",
        examples=["George", "Jane"],
    )

    last_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's last name",
        examples=["Orwell", "Austen"],
    )

    bio: str | None = Field(
        default=None,
        max_length=5000,
        description="Author biography",
        examples=["English novelist and essayist, journalist and critic..."],
    )

    model_config = CAMEL_CONFIG

    @field_validator("first_name", "last_name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """Reject whitespace-only names and normalize by stripping."""
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class AuthorCreate(AuthorBase):
    """
    Schema for creating a new author.

    Example request body:
    {
        "firstName": "Jane",
        "lastName": "Austen"
    }
    """
    pass


class AuthorUpdate(AuthorBase):
    """
    Schema for replacing an existing author (PUT semantics).

    All required fields must be sent again, plus the id, which has to
    match the id in the URL.
    """

    id: int = Field(
        ...,
        gt=0,
        description="Identifier of the author being updated",
        examples=[1],
    )


class AuthorResponse(AuthorBase):
    """
    Schema for author responses.

    from_attributes=True allows building this schema straight from an
    Author model instance: AuthorResponse.model_validate(author)
    """

    id: int = Field(
        ...,
        description="Unique identifier",
        examples=[1, 42],
    )

    books: list[BookSummary] = Field(
        default_factory=list,
        description="Books written by this author",
    )

    model_config = CAMEL_ORM_CONFIG
