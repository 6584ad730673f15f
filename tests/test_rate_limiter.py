"""
Tests for Login Rate Limiting

The limiter is switched off for the rest of the suite (conftest sets
RATE_LIMIT_ENABLED=false); these tests turn it on for their own duration
and reset its in-memory counters before and after.
"""

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from app.config import get_settings
from app.services.rate_limiter import create_limiter, limiter

settings = get_settings()

LOGIN_URL = "/api/v1/users"


def make_request(headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": LOGIN_URL,
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": ("203.0.113.7", 50000),
    }
    return Request(scope)


@pytest.fixture
def enabled_limiter(monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield limiter
    limiter.reset()


class TestClientKey:
    def test_key_is_connection_address(self):
        key_func = create_limiter()._key_func

        assert key_func(make_request({})) == "203.0.113.7"

    def test_forwarding_headers_ignored(self):
        key_func = create_limiter()._key_func

        spoofed = make_request({"X-Forwarded-For": "198.51.100.1", "X-Real-IP": "198.51.100.2"})

        assert key_func(spoofed) == "203.0.113.7"


class TestLoginLimit:
    def test_rotating_forwarded_for_does_not_reset_counter(self, client: TestClient, enabled_limiter):
        """Every attempt counts against the same client, whatever header it sends."""
        limit = int(settings.login_rate_limit.split("/")[0])
        codes = []
        for attempt in range(limit + 2):
            response = client.post(
                LOGIN_URL,
                json={"username": "admin", "password": "guess"},
                headers={"X-Forwarded-For": f"198.51.100.{attempt + 1}"},
            )
            codes.append(response.status_code)

        assert 429 in codes
        assert codes[-1] == 429

    def test_limit_response_body(self, client: TestClient, enabled_limiter):
        limit = int(settings.login_rate_limit.split("/")[0])
        for _ in range(limit):
            client.post(LOGIN_URL, json={"username": "admin", "password": "guess"})

        response = client.post(LOGIN_URL, json={"username": "admin", "password": "guess"})

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        assert "Too many requests" in response.json()["detail"]
