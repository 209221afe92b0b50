"""
Name: Auth Use Case Tests (login / refresh / logout)

Responsibilities:
  - Login: uniform INVALID_CREDENTIALS, ACCOUNT_INACTIVE, token issuance
  - Refresh: rotation, replay rejection, expiry, inactive users
  - Logout: clears the stored refresh token

Notes:
  - In-memory repository + low-cost Argon2 + injected clock
"""

import asyncio
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from cleanauth.application.usecases import (
    AuthErrorCode,
    LoginInput,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenInput,
    RefreshTokenUseCase,
)
from cleanauth.domain.entities import User

pytestmark = pytest.mark.unit

PASSWORD = "Abcdef12"


async def _seed(repository, hasher, *, email="a@x.com", active=True) -> User:
    user = User.create(
        email=email,
        first_name="Ana",
        last_name="Lopez",
        password_hash=hasher.hash(PASSWORD),
    )
    if not active:
        user.deactivate()
    await repository.add(user)
    return user


@pytest.fixture
def login(user_repository, password_hasher, token_issuer, clock) -> LoginUseCase:
    return LoginUseCase(user_repository, password_hasher, token_issuer, clock=clock)


@pytest.fixture
def refresh(user_repository, token_issuer, clock) -> RefreshTokenUseCase:
    return RefreshTokenUseCase(user_repository, token_issuer, clock=clock)


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_issues_tokens_and_stores_refresh(
        self, login, user_repository, password_hasher, token_issuer, clock
    ):
        user = await _seed(user_repository, password_hasher)

        result = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))

        assert result.error is None
        tokens = result.tokens
        assert tokens.expires_in_seconds == 15 * 60
        assert tokens.issued_at == clock()
        claims = token_issuer.validate_access_token(tokens.access_token)
        assert claims.subject == user.id

        stored = await user_repository.get_by_id(user.id)
        assert stored.refresh_token == tokens.refresh_token
        assert stored.refresh_token_expires_at == token_issuer.refresh_expiry(clock())

    @pytest.mark.asyncio
    async def test_email_is_trimmed(self, login, user_repository, password_hasher):
        await _seed(user_repository, password_hasher)

        result = await login.execute(LoginInput(email="  a@x.com ", password=PASSWORD))

        assert result.error is None

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_the_same(
        self, login, user_repository, password_hasher
    ):
        await _seed(user_repository, password_hasher)

        unknown = await login.execute(LoginInput(email="b@x.com", password=PASSWORD))
        wrong = await login.execute(LoginInput(email="a@x.com", password="Wrong123"))

        assert unknown.tokens is None and wrong.tokens is None
        assert unknown.error == wrong.error
        assert unknown.error.code == AuthErrorCode.INVALID_CREDENTIALS
        assert unknown.error.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_unknown_email_runs_dummy_verify(self, user_repository, token_issuer):
        hasher = MagicMock()
        use_case = LoginUseCase(user_repository, hasher, token_issuer)

        await use_case.execute(LoginInput(email="ghost@x.com", password="pw"))

        hasher.dummy_verify.assert_called_once_with("pw")
        hasher.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_inactive_account_rejected(
        self, login, user_repository, password_hasher
    ):
        user = await _seed(user_repository, password_hasher, active=False)

        result = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))

        assert result.error.code == AuthErrorCode.ACCOUNT_INACTIVE
        assert result.error.message == "User account is inactive"
        stored = await user_repository.get_by_id(user.id)
        assert stored.refresh_token is None

    @pytest.mark.asyncio
    async def test_inactive_with_wrong_password_is_invalid_credentials(
        self, login, user_repository, password_hasher
    ):
        await _seed(user_repository, password_hasher, active=False)

        result = await login.execute(LoginInput(email="a@x.com", password="Nope1234"))

        assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_second_login_replaces_refresh_token(
        self, login, refresh, user_repository, password_hasher
    ):
        await _seed(user_repository, password_hasher)
        first = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))
        second = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))

        stale = await refresh.execute(
            RefreshTokenInput(refresh_token=first.tokens.refresh_token)
        )

        assert first.tokens.refresh_token != second.tokens.refresh_token
        assert stale.error.code == AuthErrorCode.UNAUTHORIZED


class TestRefreshToken:
    @pytest.mark.asyncio
    async def test_rotation_issues_new_pair(
        self, login, refresh, user_repository, password_hasher, token_issuer
    ):
        user = await _seed(user_repository, password_hasher)
        logged = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))

        result = await refresh.execute(
            RefreshTokenInput(refresh_token=logged.tokens.refresh_token)
        )

        assert result.error is None
        assert result.tokens.refresh_token != logged.tokens.refresh_token
        claims = token_issuer.validate_access_token(result.tokens.access_token)
        assert claims.subject == user.id
        stored = await user_repository.get_by_id(user.id)
        assert stored.refresh_token == result.tokens.refresh_token

    @pytest.mark.asyncio
    async def test_replayed_token_rejected(
        self, login, refresh, user_repository, password_hasher
    ):
        await _seed(user_repository, password_hasher)
        logged = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))
        original = logged.tokens.refresh_token

        first = await refresh.execute(RefreshTokenInput(refresh_token=original))
        replay = await refresh.execute(RefreshTokenInput(refresh_token=original))

        assert first.error is None
        assert replay.error.code == AuthErrorCode.UNAUTHORIZED
        assert replay.error.message == "Invalid or expired refresh token"

    @pytest.mark.asyncio
    async def test_concurrent_rotations_only_one_wins(
        self, login, refresh, user_repository, password_hasher
    ):
        await _seed(user_repository, password_hasher)
        logged = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))
        original = logged.tokens.refresh_token

        results = await asyncio.gather(
            refresh.execute(RefreshTokenInput(refresh_token=original)),
            refresh.execute(RefreshTokenInput(refresh_token=original)),
        )

        winners = [r for r in results if r.error is None]
        losers = [r for r in results if r.error is not None]
        assert len(winners) == 1
        assert len(losers) == 1
        assert losers[0].error.code == AuthErrorCode.UNAUTHORIZED
        stored = await user_repository.get_by_email("a@x.com")
        assert stored.refresh_token == winners[0].tokens.refresh_token

    @pytest.mark.parametrize("token", ["", "   "])
    @pytest.mark.asyncio
    async def test_blank_token_is_validation_error(self, refresh, token):
        result = await refresh.execute(RefreshTokenInput(refresh_token=token))

        assert result.error.code == AuthErrorCode.VALIDATION_ERROR
        assert result.error.message == "Refresh token is required"

    @pytest.mark.asyncio
    async def test_unknown_token_rejected(self, refresh):
        result = await refresh.execute(RefreshTokenInput(refresh_token="nope"))

        assert result.error.code == AuthErrorCode.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_expired_token_rejected(
        self, login, refresh, user_repository, password_hasher, clock
    ):
        await _seed(user_repository, password_hasher)
        logged = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))

        clock.advance(days=7)
        result = await refresh.execute(
            RefreshTokenInput(refresh_token=logged.tokens.refresh_token)
        )

        assert result.error.code == AuthErrorCode.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_deactivated_user_cannot_refresh(
        self, login, refresh, user_repository, password_hasher
    ):
        user = await _seed(user_repository, password_hasher)
        logged = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))
        stored = await user_repository.get_by_id(user.id)
        stored.deactivate()
        await user_repository.update(stored)

        result = await refresh.execute(
            RefreshTokenInput(refresh_token=logged.tokens.refresh_token)
        )

        assert result.error.code == AuthErrorCode.UNAUTHORIZED


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_revokes_refresh_token(
        self, login, refresh, user_repository, password_hasher, clock
    ):
        user = await _seed(user_repository, password_hasher)
        logged = await login.execute(LoginInput(email="a@x.com", password=PASSWORD))

        result = await LogoutUseCase(user_repository, clock=clock).execute(user.id)
        after = await refresh.execute(
            RefreshTokenInput(refresh_token=logged.tokens.refresh_token)
        )

        assert result.logged_out is True
        assert after.error.code == AuthErrorCode.UNAUTHORIZED
        stored = await user_repository.get_by_id(user.id)
        assert stored.refresh_token is None

    @pytest.mark.asyncio
    async def test_logout_unknown_user(self, user_repository):
        result = await LogoutUseCase(user_repository).execute(uuid4())

        assert result.logged_out is False
        assert result.error.code == AuthErrorCode.NOT_FOUND
