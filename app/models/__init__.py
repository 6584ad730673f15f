"""
SQLAlchemy Models Package

Model Relationships:
- Author <- Book: Many-to-One (a book points at one author,
                  an author looks up all of its books)
- User <-> Role: Many-to-Many through user_roles

Importing every model here:
1. Makes them available as: from app.models import Book, Author
2. Ensures Alembic discovers them for migrations
"""

# The order matters for SQLAlchemy to resolve relationships
from app.models.author import Author
from app.models.book import Book
from app.models.user import Role, RoleName, User, user_roles

__all__ = [
    "Author",
    "Book",
    "Role",
    "RoleName",
    "User",
    "user_roles",
]
