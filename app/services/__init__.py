"""
Services Package

Business logic kept apart from HTTP routing, so it can be tested without
a running app.

Current services:
- auth.py: Login flow (credential check, token issuance)
- handlers.py: Generic CRUD request handlers
- mapping.py: Model <-> transfer shape mapping
- rate_limiter.py: Login rate limiting with slowapi
- responses.py: Handler outcomes and their HTTP rendering
- security.py: Password hashing and JWT utilities
- seed.py: Default roles and users
- validation.py: Request body validation policy
"""
