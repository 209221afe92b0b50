"""
Name: API Test Fixtures

Responsibilities:
  - Build a fresh app + TestClient per test (in-memory store, memory cache)
  - Swap the container's password hasher for a low-cost one
  - Helpers to register users and obtain bearer tokens
"""

import pytest
from fastapi.testclient import TestClient

from cleanauth.api.main import create_app

PASSWORD = "Abcdef12"


@pytest.fixture(autouse=True)
def _fast_hasher(monkeypatch, password_hasher):
    monkeypatch.setattr(
        "cleanauth.container.get_password_hasher", lambda: password_hasher
    )


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


class ApiHelper:
    def __init__(self, client: TestClient):
        self.client = client

    def register(self, email: str = "a@x.com", **overrides) -> dict:
        body = {
            "email": email,
            "firstName": "Ana",
            "lastName": "Lopez",
            "password": PASSWORD,
        }
        body.update(overrides)
        res = self.client.post("/users", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    def login(self, email: str = "a@x.com", password: str = PASSWORD) -> dict:
        res = self.client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        assert res.status_code == 200, res.text
        return res.json()

    def bearer(self, email: str = "a@x.com") -> dict:
        return {"Authorization": f"Bearer {self.login(email)['accessToken']}"}


@pytest.fixture
def api(client) -> ApiHelper:
    return ApiHelper(client)
