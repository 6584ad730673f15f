"""
Database Configuration Module

SQLAlchemy 2.0 setup for the BookStore API.

Session Management Pattern
==========================
"Session per request":
1. Request arrives → get_db() opens a new session
2. The repositories for that request share the session
3. Repositories commit (or roll back) their own writes
4. The session is closed when the request ends

Route functions are plain (sync) functions, so FastAPI runs them in its
threadpool and a request waiting on the database never blocks the others.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings

settings = get_settings()

# Primary and foreign keys are INTEGER columns (signed 32-bit on PostgreSQL)
MAX_ID = 2**31 - 1


def _engine_options(database_url: str) -> dict:
    """Pool options only apply to server databases, not SQLite."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,  # Verify connections are alive before using
    }


# =============================================================================
# Database Engine
# =============================================================================
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # Log SQL in debug mode
    **_engine_options(settings.database_url),
)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: repositories decide when to commit
# - autoflush=False: no implicit flush before queries
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic reads Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield opens the session, code after yield closes it,
    even when the route raised.

    Usage in Routes:
        @router.get("/authors")
        def list_authors(db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)

