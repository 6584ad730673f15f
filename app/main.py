"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests build the app the same way production does

2. Lifespan Events
   - startup: optionally seed default roles and users
   - shutdown: dispose of the connection pool

3. Middleware Stack
   - CORS: Allow cross-origin requests
   - SlowAPI: Login rate limiting

4. Exception Handlers
   - Malformed requests → 400 with field-level reasons
   - Database and unexpected errors → generic 500, details only in the log
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from app.config import get_settings
from app.database import SessionLocal, engine
from app.routers import authors_router, books_router, users_router
from app.services.rate_limiter import limiter, rate_limit_exceeded_handler
from app.services.responses import GENERIC_ERROR_MESSAGE, Outcome, render
from app.services.seed import seed
from app.services.validation import ValidationResult

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def seed_database() -> None:
    """Create the default roles and users in a session of their own."""
    db = SessionLocal()
    try:
        seed(db, settings.seed_password)
    finally:
        db.close()


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}, API version: {settings.api_version}")
    logger.info(f"Role gate enabled: {settings.auth_enabled}")
    logger.info(f"Token lifetime: {settings.access_token_expire_minutes} minute(s)")

    if settings.seed_on_startup:
        logger.info("Seeding default roles and users")
        await run_in_threadpool(seed_database)

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## BookStore API

A RESTful API for managing a bookstore's catalogue.

### Features
- **Authors**: Full CRUD operations for authors
- **Books**: Full CRUD operations for books
- **Users**: Log in to receive a bearer token

### Authentication
`POST /api/v1/users` with a username and password returns a token.
Send it as `Authorization: Bearer <token>`.
Reading requires the Administrator or Customer role; writing requires
Administrator.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # The limiter lives on app.state so slowapi's decorators can find it
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> Response:
        """
        Render framework-level request errors as 400.

        Covers path ids that are not integers and bodies that are not
        valid JSON, using the same body as the validation policy.
        """
        result = ValidationResult()
        for error in exc.errors():
            # Drop the leading "path"/"body"/"query" location part;
            # JSON decode errors locate a character offset, not a field
            loc = [str(part) for part in error.get("loc", ())][1:]
            if error.get("type") == "json_invalid":
                loc = []
            result.add(".".join(loc) or "body", error.get("msg", "Invalid value"))
        logger.warning(f"{request.method} {request.url.path}: Bad request {result.errors}")
        return render(Outcome.bad_request(result.errors))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors raised outside the handlers.

        Logs the actual error while hiding details from users.
        """
        logger.error(f"Database error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": GENERIC_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all exception handler; never leaks exception text."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": GENERIC_ERROR_MESSAGE},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    # prefix="/api/v1" creates versioned URLs: /api/v1/authors, /api/v1/books
    app.include_router(authors_router, prefix=settings.api_prefix)
    app.include_router(books_router, prefix=settings.api_prefix)
    app.include_router(users_router, prefix=settings.api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    def health_check() -> dict:
        """Used by load balancers and container probes."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "authentication": {
                "enabled": settings.auth_enabled,
                "token_lifetime_minutes": settings.access_token_expire_minutes,
            },
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "login_limit": settings.login_rate_limit,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
