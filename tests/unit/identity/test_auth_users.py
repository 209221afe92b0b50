"""
Name: Bearer Authentication Dependency Tests

Responsibilities:
  - Verify require_user accepts a valid bearer token
  - Verify a uniform 401 "Unauthenticated" for every failure mode
"""

from uuid import uuid4

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from cleanauth.api.exception_handlers import register_exception_handlers
from cleanauth.domain.entities import AccessTokenClaims
from cleanauth.identity.auth_users import _extract_bearer_token, require_user
from cleanauth.identity.tokens import TokenIssuer

pytestmark = pytest.mark.unit


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/me")
    def me(claims: AccessTokenClaims = Depends(require_user())):
        return {"sub": str(claims.subject), "role": claims.role}

    return app


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc", "abc"),
        ("bearer  abc ", "abc"),
        ("Basic abc", None),
        ("Bearer", None),
        ("Bearer   ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert _extract_bearer_token(header) == expected


def test_valid_token_passes(jwt_settings):
    user_id = uuid4()
    token = TokenIssuer(jwt_settings).issue_access_token(user_id, "a@x.com", "User")
    client = TestClient(_build_app())

    res = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 200
    assert res.json() == {"sub": str(user_id), "role": "User"}


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": "Token abc"},
    ],
)
def test_invalid_credentials_return_401(headers):
    client = TestClient(_build_app())

    res = client.get("/me", headers=headers)

    assert res.status_code == 401
    assert res.json()["message"] == "Unauthenticated"
    assert res.json()["code"] == "UNAUTHORIZED"
    assert res.headers["WWW-Authenticate"] == "Bearer"
