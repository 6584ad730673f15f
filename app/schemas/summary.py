"""
Shared Schema Configuration and Summary Shapes

Every transfer shape speaks camelCase on the wire (firstName, authorId)
while the Python attributes stay snake_case. populate_by_name lets clients
send either spelling.

The summary shapes are the small views embedded in another entity's
response: an author lists its books, a book shows its author. They live
here, apart from author.py and book.py, so neither module imports the other.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Base configuration for request shapes
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
)

# Response shapes are also built straight from SQLAlchemy objects
CAMEL_ORM_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class AuthorSummary(BaseModel):
    """Author as embedded in a book response."""

    id: int
    first_name: str
    last_name: str

    model_config = CAMEL_ORM_CONFIG


class BookSummary(BaseModel):
    """Book as embedded in an author response."""

    id: int
    title: str
    year: int | None = None
    isbn: str | None = None

    model_config = CAMEL_ORM_CONFIG


class ErrorResponse(BaseModel):
    """Body of 4xx/5xx responses, used for OpenAPI documentation."""

    detail: str = Field(..., description="Human-readable error message")
    errors: dict[str, list[str]] | None = Field(
        default=None,
        description="Field-level validation reasons, keyed by field name",
    )
