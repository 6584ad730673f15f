"""
Authors Router

CRUD endpoints for authors. Each route only wires HTTP to the shared
CrudHandler (app.services.handlers) and renders its Outcome.

Access:
- GET: Administrator or Customer
- POST/PUT/DELETE: Administrator
"""

from typing import Any, List

from fastapi import APIRouter, Body, Response, status

from app.dependencies import AuthorHandler, ReadAccess, WriteAccess
from app.schemas import AuthorResponse, ErrorResponse
from app.services.responses import render

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        401: {"description": "Missing or invalid bearer token"},
        403: {"description": "Caller lacks the required role"},
        500: {"model": ErrorResponse, "description": "Internal failure"},
    },
)


@router.get(
    "",
    response_model=List[AuthorResponse],
    summary="List all authors",
    dependencies=[ReadAccess],
)
def list_authors(handler: AuthorHandler) -> Response:
    """List all authors with their books."""
    return render(handler.list())


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Get an author by ID",
    responses={404: {"model": ErrorResponse, "description": "Author not found"}},
    dependencies=[ReadAccess],
)
def get_author(author_id: int, handler: AuthorHandler) -> Response:
    """Get a single author by ID."""
    return render(handler.get(author_id))


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    responses={400: {"model": ErrorResponse, "description": "Invalid author"}},
    dependencies=[WriteAccess],
)
def create_author(
    handler: AuthorHandler,
    payload: Any = Body(
        default=None,
        description="AuthorCreate body",
        examples=[{"firstName": "Jane", "lastName": "Austen"}],
    ),
) -> Response:
    """Create a new author. The body must not carry an id."""
    return render(handler.create(payload))


@router.put(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update an author",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid author or id mismatch"},
        404: {"model": ErrorResponse, "description": "Author not found"},
    },
    dependencies=[WriteAccess],
)
def update_author(
    author_id: int,
    handler: AuthorHandler,
    payload: Any = Body(
        default=None,
        description="AuthorUpdate body; its id must equal author_id",
        examples=[{"id": 1, "firstName": "Jane", "lastName": "Austen"}],
    ),
) -> Response:
    """Replace an existing author."""
    return render(handler.update(author_id, payload))


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id"},
        404: {"model": ErrorResponse, "description": "Author not found"},
    },
    dependencies=[WriteAccess],
)
def delete_author(author_id: int, handler: AuthorHandler) -> Response:
    """Delete an author. Their books remain, without an author."""
    return render(handler.delete(author_id))
