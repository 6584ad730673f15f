"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. HMAC-signed JWT bearer tokens (python-jose)
3. Issuer/audience/expiry checks when a token is read back

Usage:
    from app.services.security import create_access_token, decode_token

    token = create_access_token(user, ["Administrator"])
    claims = decode_token(token)
    claims["role"]  # ["Administrator"]
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

if TYPE_CHECKING:
    from app.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# - schemes: bcrypt is the only accepted hash
# - deprecated: "auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# -------------------------------------------------------------------------
# Token Claim Names
# -------------------------------------------------------------------------
SUBJECT_CLAIM = "sub"
TOKEN_ID_CLAIM = "jti"
USER_ID_CLAIM = "nameid"
ROLE_CLAIM = "role"


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("P@ssword1")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user: "User",
    roles: list[str],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed bearer token for a user.

    Claims:
    - sub: the user's email
    - jti: a fresh UUID, unique per token
    - nameid: the user's id
    - role: one entry per role granted to the user
    - iss / aud: settings.jwt_issuer
    - exp: now + expires_delta (settings.access_token_expire_minutes
      when not given)

    Args:
        user: The authenticated user
        roles: Names of the user's roles
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    now = datetime.now(UTC)
    to_encode = {
        SUBJECT_CLAIM: user.email,
        TOKEN_ID_CLAIM: str(uuid.uuid4()),
        USER_ID_CLAIM: str(user.id),
        ROLE_CLAIM: list(roles),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_issuer,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a bearer token.

    Checks the signature, expiry, issuer and audience.

    Returns:
        Decoded claims if valid, None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_issuer,
            issuer=settings.jwt_issuer,
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def token_roles(claims: dict) -> set[str]:
    """
    Role names carried by decoded claims.

    A single role may arrive as a plain string rather than a list.
    """
    roles = claims.get(ROLE_CLAIM) or []
    if isinstance(roles, str):
        return {roles}
    return set(roles)
