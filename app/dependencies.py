"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

What lives here:
- DbSession: the request-scoped SQLAlchemy session
- AuthorHandler / BookHandler / Identity: collaborators built per request
  on top of that session, so no two requests share mutable state
- RoleGate: the bearer-token role check placed in front of routes
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models import RoleName
from app.repositories import AuthorRepository, BookRepository, IdentityStore
from app.schemas import AuthorCreate, AuthorUpdate, BookCreate, BookUpdate
from app.services.handlers import CrudHandler
from app.services.mapping import author_mapper, book_mapper
from app.services.security import decode_token, token_roles

settings = get_settings()

# Instead of writing:
#   def list_authors(db: Session = Depends(get_db)):
# routes write:
#   def list_authors(db: DbSession):
DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Request Handlers
# =============================================================================
def get_author_handler(db: DbSession) -> CrudHandler:
    """CRUD handler for authors, bound to this request's session."""
    return CrudHandler(
        name="Authors",
        repository=AuthorRepository(db),
        mapper=author_mapper,
        create_schema=AuthorCreate,
        update_schema=AuthorUpdate,
        base_url=f"{settings.api_prefix}/authors",
    )


def get_book_handler(db: DbSession) -> CrudHandler:
    """CRUD handler for books, bound to this request's session."""
    return CrudHandler(
        name="Books",
        repository=BookRepository(db),
        mapper=book_mapper,
        create_schema=BookCreate,
        update_schema=BookUpdate,
        base_url=f"{settings.api_prefix}/books",
    )


def get_identity_store(db: DbSession) -> IdentityStore:
    return IdentityStore(db)


AuthorHandler = Annotated[CrudHandler, Depends(get_author_handler)]
BookHandler = Annotated[CrudHandler, Depends(get_book_handler)]
Identity = Annotated[IdentityStore, Depends(get_identity_store)]


# =============================================================================
# Role-Based Access
# =============================================================================
# HTTPBearer extracts the token from the "Authorization: Bearer <token>"
# header and adds the "Authorize" button to Swagger UI.
# auto_error=False so RoleGate can answer with its own 401.
bearer_scheme = HTTPBearer(auto_error=False)


class RoleGate:
    """
    Dependency admitting callers whose token carries one of `roles`.

    The same handlers serve a gated and an open deployment: with
    settings.auth_enabled set to false every request passes and the gate
    returns None.

    Usage:
        ReadAccess = Depends(RoleGate(RoleName.ADMINISTRATOR, RoleName.CUSTOMER))

        @router.get("", dependencies=[ReadAccess])
        def list_authors(...): ...

    Raises:
        HTTPException: 401 without a valid token, 403 without a matching role
    """

    def __init__(self, *roles: str) -> None:
        self.roles = frozenset(str(getattr(role, "value", role)) for role in roles)

    def __call__(
        self,
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    ) -> dict | None:
        if not settings.auth_enabled:
            return None

        if credentials is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )

        claims = decode_token(credentials.credentials)
        if claims is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if self.roles and not (token_roles(claims) & self.roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )

        return claims


# Reads are open to administrators and customers, writes to administrators
ReadAccess = Depends(RoleGate(RoleName.ADMINISTRATOR, RoleName.CUSTOMER))
WriteAccess = Depends(RoleGate(RoleName.ADMINISTRATOR))
