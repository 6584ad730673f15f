"""
User and Role Models

The identity store behind the login endpoint.

Users hold a bcrypt password hash and any number of named roles.
Roles are granted through the user_roles association table, the same way
a many-to-many link is declared anywhere else with SQLAlchemy: a plain
Table object with two foreign keys and no model class of its own.
"""

from enum import Enum

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class RoleName(str, Enum):
    """
    Role names understood by the API.

    - ADMINISTRATOR: Full read/write access to authors and books
    - CUSTOMER: Read-only access
    """
    ADMINISTRATOR = "Administrator"
    CUSTOMER = "Customer"


# =============================================================================
# Association Table
# =============================================================================
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table granting roles to users",
)


class Role(Base):
    """A named permission group, e.g. "Administrator"."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="Role name carried in token role claims"
    )

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name='{self.name}')"


class User(Base):
    """
    User model representing accounts that can log in.

    Table: users

    Indexes:
    - username: Unique index for login lookups
    - email: Unique index, used as the token subject

    Example:
        user = User(
            username="admin",
            email="admin@bookstore.com",
            hashed_password=hash_password("P@ssword1"),
            roles=[administrator_role],
        )
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Login name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    roles: Mapped[list[Role]] = relationship(
        Role,
        secondary=user_roles,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, email='{self.email}', username='{self.username}')"
