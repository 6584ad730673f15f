"""
User Pydantic Schemas

Schemas for the login endpoint:
- UserLogin: credentials sent by the client
- TokenResponse: the signed bearer token returned on success
"""

from pydantic import BaseModel, Field

from app.schemas.summary import CAMEL_CONFIG


class UserLogin(BaseModel):
    """
    Login credentials.

    The password is never logged and never echoed back; a failed login
    returns only the username (see UserLoginEcho).
    """

    username: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Login name",
        examples=["admin"],
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Plain text password",
        examples=["P@ssword1"],
    )

    model_config = CAMEL_CONFIG


class UserLoginEcho(BaseModel):
    """Credentials echoed back on a failed login, password excluded."""

    username: str


class TokenResponse(BaseModel):
    """
    Signed bearer token.

    Usage:
        Authorization: Bearer <token>
    """

    token: str = Field(
        ...,
        description="Signed JWT carrying the user's email, id and roles",
    )
