"""
Users Router

POST /users logs a user in and returns a signed bearer token.
The route is open to anonymous callers and rate limited per client.
"""

from typing import Any

from fastapi import APIRouter, Body, Request, Response

from app.config import get_settings
from app.dependencies import Identity
from app.schemas import ErrorResponse, TokenResponse, UserLoginEcho
from app.services.auth import authenticate
from app.services.rate_limiter import limiter
from app.services.responses import render

settings = get_settings()

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    description="""
    Authenticate with username and password to receive a bearer token.

    **Usage:**
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Missing username or password"},
        401: {"model": UserLoginEcho, "description": "Wrong username or password"},
        429: {"description": "Too many login attempts"},
        500: {"model": ErrorResponse, "description": "Internal failure"},
    },
)
@limiter.limit(settings.login_rate_limit)
def login(
    request: Request,
    identity: Identity,
    payload: Any = Body(
        default=None,
        description="UserLogin body",
        examples=[{"username": "admin", "password": "P@ssword1"}],
    ),
) -> Response:
    """Verify credentials through the identity store and issue a token."""
    return render(authenticate(identity, payload))
