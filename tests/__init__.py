"""
Test Suite for BookStore API

Test Organization:
- conftest.py: Shared fixtures (test database, client, users, tokens)
- test_authors.py / test_books.py: /api/v1/authors and /api/v1/books endpoints
- test_users.py: /api/v1/users login endpoint
- test_handlers.py: CrudHandler against in-memory repositories
- test_validation.py, test_mapping.py, test_security.py: unit tests
- test_dependencies.py: Role gate

Running Tests:
    pytest
    pytest tests/test_authors.py -v
"""
