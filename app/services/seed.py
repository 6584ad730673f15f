"""
Default Roles and Users

Creates the Administrator and Customer roles and one user for each:

| Username | Email                  | Role          |
|----------|------------------------|---------------|
| admin    | admin@bookstore.com    | Administrator |
| customer | customer@bookstore.com | Customer      |

Running it again is a no-op: roles and users are looked up first and only
created when missing.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Role, RoleName, User
from app.repositories.identity import IdentityStore
from app.services.security import hash_password

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    ("admin", "admin@bookstore.com", RoleName.ADMINISTRATOR),
    ("customer", "customer@bookstore.com", RoleName.CUSTOMER),
]


def seed_roles(db: Session) -> dict[str, Role]:
    """Create any missing role and return all known roles by name."""
    roles = {}
    for role_name in RoleName:
        role = db.execute(
            select(Role).where(Role.name == role_name.value)
        ).scalar_one_or_none()
        if role is None:
            role = Role(name=role_name.value)
            db.add(role)
            logger.info(f"Created role {role_name.value}")
        roles[role_name.value] = role
    db.flush()
    return roles


def seed_users(db: Session, roles: dict[str, Role], password: str) -> list[User]:
    """Create any missing default user; return the users created."""
    identity = IdentityStore(db)
    created = []
    for username, email, role_name in DEFAULT_USERS:
        if identity.find_by_email(email) is not None:
            continue
        user = User(
            username=username,
            email=email,
            hashed_password=hash_password(password),
            roles=[roles[role_name.value]],
        )
        db.add(user)
        created.append(user)
        logger.info(f"Created user {username} with role {role_name.value}")
    return created


def seed(db: Session, password: str) -> None:
    """Seed roles, then users, in one transaction."""
    roles = seed_roles(db)
    seed_users(db, roles, password)
    db.commit()
