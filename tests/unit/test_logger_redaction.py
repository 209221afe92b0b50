"""
Name: Structured Logger Tests

Responsibilities:
  - JSON output enriched with request context
  - Passwords, hashes and tokens never reach the output
"""

import json
import logging

import pytest

from cleanauth.context import clear_context, set_request_context
from cleanauth.crosscutting.logger import REDACTED, JSONFormatter, _Redactor

pytestmark = pytest.mark.unit


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="cleanauth",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.parametrize(
    "key",
    ["password", "password_hash", "refresh_token", "access_token", "Authorization"],
)
def test_sensitive_keys_are_redacted(key):
    payload = json.loads(JSONFormatter().format(_record(**{key: "value"})))

    assert payload[key] == REDACTED


def test_nested_sensitive_keys_are_redacted():
    sanitized = _Redactor().sanitize({"user": {"email": "a@x.com", "password": "pw"}})

    assert sanitized == {"user": {"email": "a@x.com", "password": REDACTED}}


def test_request_context_is_included():
    set_request_context(request_id="req-1", method="GET", path="/users")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert payload["request_id"] == "req-1"
    assert payload["method"] == "GET"
    assert payload["path"] == "/users"
    assert payload["message"] == "hello"


def test_long_strings_are_truncated():
    sanitized = _Redactor(max_str=10).sanitize("x" * 50)

    assert sanitized.startswith("x" * 10)
    assert sanitized.endswith("(truncated)")
