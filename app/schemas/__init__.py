"""
Pydantic Schemas Package

Transfer shapes for request/response bodies, kept separate from the
SQLAlchemy models so the database schema can evolve independently of the
API.

Schema Naming Convention:
- XxxBase: Shared fields between create/update/response
- XxxCreate: Fields accepted when creating a new record (no id)
- XxxUpdate: Fields accepted when replacing a record (id required)
- XxxResponse: Fields returned in API responses
- XxxSummary: Small view embedded in another entity's response
"""

from app.schemas.author import (
    AuthorBase,
    AuthorCreate,
    AuthorResponse,
    AuthorUpdate,
)
from app.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)
from app.schemas.summary import AuthorSummary, BookSummary, ErrorResponse
from app.schemas.user import TokenResponse, UserLogin, UserLoginEcho

__all__ = [
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    "AuthorSummary",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookSummary",
    # Auth/Token schemas
    "UserLogin",
    "UserLoginEcho",
    "TokenResponse",
    # Errors
    "ErrorResponse",
]
