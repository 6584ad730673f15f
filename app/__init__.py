"""
BookStore API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection (sessions, handlers, role gate)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- repositories/: Data access behind the request handlers
- routers/: API route definitions
- services/: Business logic (handlers, validation, tokens)
"""

__version__ = "0.1.0"
