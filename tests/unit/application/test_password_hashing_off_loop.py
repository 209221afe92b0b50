"""
Name: Password Hashing Off the Event Loop

Responsibilities:
  - Login and CreateUser run Argon2 work in worker threads
  - The event loop keeps serving other coroutines while a hash is computed

Notes:
  - _GatedHasher blocks until a coroutine on the loop opens the gate; if the
    hash ran on the loop thread the gate would never open in time
"""

import asyncio
import threading

import pytest

from cleanauth.application.usecases import (
    AuthErrorCode,
    CreateUserInput,
    CreateUserUseCase,
    LoginInput,
    LoginUseCase,
)
from cleanauth.domain.entities import User
from cleanauth.infrastructure.email import EmailOutbox

pytestmark = pytest.mark.unit

GATE_TIMEOUT_SECONDS = 2


class _GatedHasher:
    def __init__(self) -> None:
        self.gate = threading.Event()
        self.threads: list[int] = []

    def _wait(self) -> bool:
        self.threads.append(threading.get_ident())
        return self.gate.wait(timeout=GATE_TIMEOUT_SECONDS)

    def hash(self, plaintext: str) -> str:
        if not self._wait():
            raise AssertionError("hash blocked the event loop")
        return "digest"

    def verify(self, plaintext: str, digest: str) -> bool:
        return self._wait()

    def dummy_verify(self, plaintext: str) -> None:
        self._wait()

    def needs_rehash(self, digest: str) -> bool:
        return False


async def _open_gate(hasher: _GatedHasher) -> None:
    await asyncio.sleep(0)
    hasher.gate.set()


@pytest.mark.asyncio
async def test_login_verifies_password_in_worker_thread(
    user_repository, token_issuer, clock
):
    await user_repository.add(
        User.create(
            email="a@x.com", first_name="Ana", last_name="Lopez", password_hash="d"
        )
    )
    hasher = _GatedHasher()
    login = LoginUseCase(user_repository, hasher, token_issuer, clock=clock)

    result, _ = await asyncio.gather(
        login.execute(LoginInput(email="a@x.com", password="Abcdef12")),
        _open_gate(hasher),
    )

    assert result.error is None
    assert hasher.threads and threading.get_ident() not in hasher.threads


@pytest.mark.asyncio
async def test_unknown_email_decoy_runs_in_worker_thread(
    user_repository, token_issuer, clock
):
    hasher = _GatedHasher()
    hasher.gate.set()
    login = LoginUseCase(user_repository, hasher, token_issuer, clock=clock)

    result = await login.execute(LoginInput(email="ghost@x.com", password="x"))

    assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS
    assert hasher.threads and threading.get_ident() not in hasher.threads


@pytest.mark.asyncio
async def test_create_user_hashes_in_worker_thread(user_repository, clock):
    hasher = _GatedHasher()
    create_user = CreateUserUseCase(
        user_repository, hasher, EmailOutbox(), clock=clock
    )

    result, _ = await asyncio.gather(
        create_user.execute(
            CreateUserInput(
                email="a@x.com",
                first_name="Ana",
                last_name="Lopez",
                password="Abcdef12",
            )
        ),
        _open_gate(hasher),
    )

    assert result.error is None
    stored = await user_repository.get_by_email("a@x.com")
    assert stored.password_hash == "digest"
