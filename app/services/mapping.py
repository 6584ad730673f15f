"""
Object Mapping

Field-by-field copies between SQLAlchemy models and transfer shapes.

Both directions are pure: to_entity() builds a new, unsaved model from the
shape's column fields (relationship fields such as Author.books are left
alone), and to_response() reads a model through the response schema.
"""

from typing import Generic, Iterable, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect

from app.database import Base
from app.models import Author, Book
from app.schemas import AuthorResponse, BookResponse

ModelT = TypeVar("ModelT", bound=Base)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class EntityMapper(Generic[ModelT, ResponseT]):
    """
    Maps one model class to and from its transfer shapes.

    Example:
        mapper = EntityMapper(Author, AuthorResponse)
        author = mapper.to_entity(AuthorCreate(first_name="Jane", last_name="Austen"))
        mapper.to_response(author).first_name  # "Jane"
    """

    def __init__(self, model: type[ModelT], response_schema: type[ResponseT]) -> None:
        self.model = model
        self.response_schema = response_schema
        self.columns = frozenset(attr.key for attr in inspect(model).column_attrs)

    def to_entity(self, shape: BaseModel) -> ModelT:
        """Copy every shape field that is also a column onto a new model."""
        values = {
            name: value
            for name, value in shape.model_dump().items()
            if name in self.columns
        }
        return self.model(**values)

    def to_response(self, entity: ModelT) -> ResponseT:
        return self.response_schema.model_validate(entity)

    def to_responses(self, entities: Iterable[ModelT]) -> list[ResponseT]:
        return [self.to_response(entity) for entity in entities]


author_mapper = EntityMapper(Author, AuthorResponse)
book_mapper = EntityMapper(Book, BookResponse)
