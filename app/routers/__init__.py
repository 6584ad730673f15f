"""
API Routers Package

Router Structure:
- authors.py: /api/v1/authors/* endpoints
- books.py: /api/v1/books/* endpoints
- users.py: /api/v1/users login endpoint

Each router is imported and registered in main.py.
"""

from app.routers.authors import router as authors_router
from app.routers.books import router as books_router
from app.routers.users import router as users_router

__all__ = [
    "authors_router",
    "books_router",
    "users_router",
]
