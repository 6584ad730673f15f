"""
Books Router

CRUD endpoints for books, mirroring the authors router. Path ids are
integers; anything else is rejected with 400 before a handler runs.

Access:
- GET: Administrator or Customer
- POST/PUT/DELETE: Administrator
"""

from typing import Any, List

from fastapi import APIRouter, Body, Response, status

from app.dependencies import BookHandler, ReadAccess, WriteAccess
from app.schemas import BookResponse, ErrorResponse
from app.services.responses import render

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        401: {"description": "Missing or invalid bearer token"},
        403: {"description": "Caller lacks the required role"},
        500: {"model": ErrorResponse, "description": "Internal failure"},
    },
)


@router.get(
    "",
    response_model=List[BookResponse],
    summary="List all books",
    dependencies=[ReadAccess],
)
def list_books(handler: BookHandler) -> Response:
    """List all books with their authors."""
    return render(handler.list())


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
    dependencies=[ReadAccess],
)
def get_book(book_id: int, handler: BookHandler) -> Response:
    return render(handler.get(book_id))


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    responses={400: {"model": ErrorResponse, "description": "Invalid book"}},
    dependencies=[WriteAccess],
)
def create_book(
    handler: BookHandler,
    payload: Any = Body(
        default=None,
        description="BookCreate body",
        examples=[{"title": "1984", "year": 1949, "isbn": "9780451524935", "authorId": 1}],
    ),
) -> Response:
    return render(handler.create(payload))


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update a book",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid book or id mismatch"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
    dependencies=[WriteAccess],
)
def update_book(
    book_id: int,
    handler: BookHandler,
    payload: Any = Body(
        default=None,
        description="BookUpdate body; its id must equal book_id",
        examples=[{"id": 1, "title": "Nineteen Eighty-Four", "year": 1949}],
    ),
) -> Response:
    """Replace an existing book. Optional fields left out are cleared."""
    return render(handler.update(book_id, payload))


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
    dependencies=[WriteAccess],
)
def delete_book(book_id: int, handler: BookHandler) -> Response:
    return render(handler.delete(book_id))
