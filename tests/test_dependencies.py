"""
Tests for Role-Based Access and Failure Handling at the HTTP Edge

Covers:
- RoleGate on its own: missing, invalid, insufficient and valid tokens
- The open deployment (AUTH_ENABLED=false)
- A failing repository surfacing as a generic 500
"""

from datetime import timedelta

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from app.config import get_settings
from app.dependencies import RoleGate, get_author_handler
from app.main import app
from app.models import Author, RoleName, User
from app.repositories import AuthorRepository
from app.schemas import AuthorCreate, AuthorUpdate
from app.services.handlers import CrudHandler
from app.services.mapping import author_mapper
from app.services.responses import GENERIC_ERROR_MESSAGE
from app.services.security import create_access_token

settings = get_settings()


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def token_for(*roles: str, expires_delta: timedelta | None = None) -> str:
    user = User(id=1, username="someone", email="someone@bookstore.com", hashed_password="")
    return create_access_token(user, list(roles), expires_delta=expires_delta)


class TestRoleGate:
    gate = RoleGate(RoleName.ADMINISTRATOR)

    def test_missing_token(self):
        with pytest.raises(HTTPException) as exc_info:
            self.gate(None)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_invalid_token(self):
        with pytest.raises(HTTPException) as exc_info:
            self.gate(bearer("garbage"))

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token(self):
        token = token_for("Administrator", expires_delta=timedelta(seconds=-5))

        with pytest.raises(HTTPException) as exc_info:
            self.gate(bearer(token))

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_role(self):
        with pytest.raises(HTTPException) as exc_info:
            self.gate(bearer(token_for("Customer")))

        assert exc_info.value.status_code == status.HTTP_403_FORBIDDEN

    def test_matching_role_returns_claims(self):
        claims = self.gate(bearer(token_for("Customer", "Administrator")))

        assert claims["sub"] == "someone@bookstore.com"

    def test_any_listed_role_is_enough(self):
        gate = RoleGate(RoleName.ADMINISTRATOR, RoleName.CUSTOMER)

        assert gate(bearer(token_for("Customer"))) is not None

    def test_disabled_gate_admits_everyone(self, monkeypatch):
        monkeypatch.setattr(settings, "auth_enabled", False)

        assert self.gate(None) is None


class TestAuthenticationOverHttp:
    def test_no_token(self, client):
        response = client.get("/api/v1/authors")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_header(self, client):
        response = client.get("/api/v1/authors", headers={"Authorization": "Token abc"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_customer_cannot_delete(self, client, customer_headers, sample_author):
        response = client.delete(f"/api/v1/authors/{sample_author.id}", headers=customer_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_open_deployment(self, client, monkeypatch):
        """With the gate disabled, the same routes serve anonymous callers."""
        monkeypatch.setattr(settings, "auth_enabled", False)

        created = client.post("/api/v1/authors", json={"firstName": "Jane", "lastName": "Austen"})
        listed = client.get("/api/v1/authors")

        assert created.status_code == status.HTTP_201_CREATED
        assert listed.status_code == status.HTTP_200_OK
        assert [author["lastName"] for author in listed.json()] == ["Austen"]


class BrokenAuthorRepository(AuthorRepository):
    """Repository whose every write is refused and whose reads blow up."""

    def find_all(self):
        raise RuntimeError("connection reset by peer")

    def create(self, entity: Author) -> bool:
        return False


class TestInternalErrors:
    @pytest.fixture
    def broken_handler(self, db_session):
        def override():
            return CrudHandler(
                name="Authors",
                repository=BrokenAuthorRepository(db_session),
                mapper=author_mapper,
                create_schema=AuthorCreate,
                update_schema=AuthorUpdate,
            )

        app.dependency_overrides[get_author_handler] = override
        yield
        app.dependency_overrides.pop(get_author_handler, None)

    def test_failed_create_is_generic_500(self, client, admin_headers, broken_handler, caplog):
        response = client.post(
            "/api/v1/authors",
            json={"firstName": "Jane", "lastName": "Austen"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": GENERIC_ERROR_MESSAGE}
        assert "Authors-Create: Creation Failed" in caplog.text

    def test_exception_text_never_reaches_client(self, client, admin_headers, broken_handler, caplog):
        response = client.get("/api/v1/authors", headers=admin_headers)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "connection reset" not in response.text
        assert "connection reset by peer" in caplog.text
