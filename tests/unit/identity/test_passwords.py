"""
Name: Password Hasher Tests

Responsibilities:
  - Verify Argon2 digests are salted and self-describing
  - Verify verify() never raises (mismatch, garbage digest, empty input)
"""

import pytest

from cleanauth.domain.errors import InvalidPasswordInput

pytestmark = pytest.mark.unit


def test_hash_then_verify(password_hasher):
    digest = password_hasher.hash("Abcdef12")

    assert digest.startswith("$argon2")
    assert password_hasher.verify("Abcdef12", digest) is True


def test_same_password_gets_different_digests(password_hasher):
    assert password_hasher.hash("Abcdef12") != password_hasher.hash("Abcdef12")


def test_wrong_password_is_false(password_hasher):
    digest = password_hasher.hash("Abcdef12")

    assert password_hasher.verify("abcdef12", digest) is False


@pytest.mark.parametrize("digest", ["", "not-a-hash", "$2b$12$bcryptlooking"])
def test_malformed_digest_is_false(password_hasher, digest):
    assert password_hasher.verify("Abcdef12", digest) is False


def test_empty_plaintext_is_false(password_hasher):
    digest = password_hasher.hash("Abcdef12")

    assert password_hasher.verify("", digest) is False


def test_hash_rejects_blank_password(password_hasher):
    with pytest.raises(InvalidPasswordInput):
        password_hasher.hash("   ")


def test_dummy_verify_does_not_raise(password_hasher):
    password_hasher.dummy_verify("whatever")
    password_hasher.dummy_verify("")


def test_needs_rehash_false_for_current_params(password_hasher):
    digest = password_hasher.hash("Abcdef12")

    assert password_hasher.needs_rehash(digest) is False
