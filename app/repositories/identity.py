"""
Identity Store

Credential and role lookups used by the login endpoint. Password checks
happen here, against the stored bcrypt hash, so the login flow itself
never compares passwords.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import User
from app.services.security import verify_password

logger = logging.getLogger(__name__)


class IdentityStore:
    """Data-access layer for users and their roles."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_name(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def check_password(self, username: str, password: str) -> bool:
        """
        Verify a username/password pair.

        Unknown users and wrong passwords both return False, so callers
        cannot tell which half of the pair was wrong.
        """
        user = self.find_by_name(username)
        if user is None:
            logger.debug(f"No user named {username}")
            return False
        return verify_password(password, user.hashed_password)

    def get_roles(self, user: User) -> list[str]:
        """Names of the roles granted to this user, sorted."""
        return sorted(role.name for role in user.roles)
