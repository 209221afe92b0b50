"""
Name: Domain Error Tests

Responsibilities:
  - Verify stable error codes carried by domain exceptions
"""

import pytest

from cleanauth.domain.errors import (
    DomainError,
    EmailAlreadyExistsError,
    InvalidPasswordInput,
    NotFoundError,
)

pytestmark = pytest.mark.unit


def test_domain_error_default_code():
    err = DomainError("boom")

    assert err.code == "DOMAIN_ERROR"
    assert str(err) == "boom"


def test_not_found_is_domain_error():
    err = NotFoundError("missing")

    assert isinstance(err, DomainError)
    assert err.code == "NOT_FOUND"


def test_email_exists_message():
    err = EmailAlreadyExistsError("a@x.com")

    assert err.code == "EMAIL_EXISTS"
    assert err.message == "Email a@x.com is already in use"
    assert err.email == "a@x.com"


def test_invalid_password_input_is_validation_error():
    assert InvalidPasswordInput().code == "VALIDATION_ERROR"
