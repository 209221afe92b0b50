"""
Name: Token Issuer Tests

Responsibilities:
  - Validate JWT claims (sub, email, role, iss, aud, exp)
  - Verify expiry against the injected clock (no leeway)
  - Reject tokens signed with another key / issuer / audience
  - Verify refresh token shape (64 random bytes, base64)
"""

import base64
from uuid import uuid4

import jwt
import pytest

from cleanauth.identity.tokens import JwtSettings, TokenIssuer

pytestmark = pytest.mark.unit


def test_issue_and_validate_access_token(token_issuer, jwt_settings):
    user_id = uuid4()

    token = token_issuer.issue_access_token(user_id, "a@x.com", "User")
    claims = token_issuer.validate_access_token(token)

    assert claims is not None
    assert claims.subject == user_id
    assert claims.email == "a@x.com"
    assert claims.role == "User"
    assert claims.issuer == jwt_settings.issuer
    assert claims.audience == jwt_settings.audience
    assert int((claims.expires_at - claims.issued_at).total_seconds()) == 15 * 60


def test_payload_carries_standard_claims(token_issuer):
    token = token_issuer.issue_access_token(uuid4(), "a@x.com", "Admin")

    payload = jwt.decode(token, options={"verify_signature": False})

    assert set(payload) >= {"sub", "email", "role", "iat", "exp", "iss", "aud"}
    assert payload["exp"] - payload["iat"] == 15 * 60


def test_token_valid_just_before_expiry(token_issuer, clock):
    token = token_issuer.issue_access_token(uuid4(), "a@x.com", "User")

    clock.advance(minutes=14, seconds=59)

    assert token_issuer.validate_access_token(token) is not None


def test_token_rejected_at_expiry(token_issuer, clock):
    token = token_issuer.issue_access_token(uuid4(), "a@x.com", "User")

    clock.advance(minutes=15)

    assert token_issuer.validate_access_token(token) is None


@pytest.mark.parametrize(
    "field,value",
    [
        ("secret", "another-secret-key-with-at-least-32-chars"),
        ("issuer", "someone-else"),
        ("audience", "other-clients"),
    ],
)
def test_token_from_foreign_settings_rejected(
    token_issuer, clock, jwt_settings, field, value
):
    data = {
        "secret": jwt_settings.secret,
        "issuer": jwt_settings.issuer,
        "audience": jwt_settings.audience,
    }
    data[field] = value
    foreign = TokenIssuer(JwtSettings(**data), clock=clock)

    token = foreign.issue_access_token(uuid4(), "a@x.com", "User")

    assert token_issuer.validate_access_token(token) is None


@pytest.mark.parametrize("token", ["", "not.a.jwt", "abc"])
def test_garbage_tokens_rejected(token_issuer, token):
    assert token_issuer.validate_access_token(token) is None


def test_token_without_email_rejected(token_issuer, clock, jwt_settings):
    now = int(clock().timestamp())
    token = jwt.encode(
        {
            "sub": str(uuid4()),
            "role": "User",
            "iat": now,
            "exp": now + 60,
            "iss": jwt_settings.issuer,
            "aud": jwt_settings.audience,
        },
        jwt_settings.secret,
        algorithm="HS256",
    )

    assert token_issuer.validate_access_token(token) is None


def test_refresh_token_is_64_random_bytes():
    token = TokenIssuer.issue_refresh_token()

    assert len(base64.b64decode(token)) == 64
    assert TokenIssuer.issue_refresh_token() != token


def test_refresh_expiry_uses_configured_days(token_issuer, clock):
    expiry = token_issuer.refresh_expiry(clock())

    assert (expiry - clock()).days == 7
