"""
Repositories Package

Data-access classes the request handlers and login flow depend on.
Each one wraps the request-scoped SQLAlchemy Session from get_db().
"""

from app.repositories.author import AuthorRepository
from app.repositories.base import RepositoryBase, SQLAlchemyRepository
from app.repositories.book import BookRepository
from app.repositories.identity import IdentityStore

__all__ = [
    "RepositoryBase",
    "SQLAlchemyRepository",
    "AuthorRepository",
    "BookRepository",
    "IdentityStore",
]
