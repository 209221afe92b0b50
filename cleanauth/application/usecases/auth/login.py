"""
===============================================================================
USE CASE: Login
===============================================================================

Business Goal:
    Canjear email + password por un access token corto y un refresh token
    largo, persistiendo el refresh token en el usuario.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    LoginUseCase

Responsibilities:
    - Buscar el usuario por email (match exacto).
    - Verificar password (con verificación señuelo si el email no existe).
    - Rechazar cuentas inactivas.
    - Emitir tokens y guardar el refresh token (expira en refresh_ttl_days).

Collaborators:
    - UserRepository: get_by_email, update
    - PasswordHasher: verify, dummy_verify
    - TokenIssuer: issue_access_token, issue_refresh_token, refresh_expiry

Error Mapping:
    - INVALID_CREDENTIALS: email desconocido o password incorrecto (mismo mensaje)
    - ACCOUNT_INACTIVE: cuenta desactivada
===============================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_login
from ....domain.entities import AuthTokens, utcnow
from ....domain.repositories import UserRepository
from ....domain.services import PasswordHasher
from ....identity.tokens import TokenIssuer
from .auth_results import AuthError, AuthErrorCode, AuthResult

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
ACCOUNT_INACTIVE_MESSAGE = "User account is inactive"


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


class LoginUseCase:
    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        clock: Callable = utcnow,
    ) -> None:
        self._users = repository
        self._hasher = hasher
        self._tokens = tokens
        self._clock = clock

    async def execute(self, input_data: LoginInput) -> AuthResult:
        email = (input_data.email or "").strip()
        user = await self._users.get_by_email(email) if email else None

        if user is None:
            # Mismo costo que un password incorrecto.
            await asyncio.to_thread(self._hasher.dummy_verify, input_data.password)
            return self._invalid_credentials(reason="unknown_email")

        # Argon2 es CPU-bound: fuera del event loop.
        verified = await asyncio.to_thread(
            self._hasher.verify, input_data.password, user.password_hash
        )
        if not verified:
            return self._invalid_credentials(reason="wrong_password")

        if not user.is_active:
            logger.warning(
                "Login rechazado: cuenta inactiva", extra={"user_id": str(user.id)}
            )
            record_login("inactive")
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.ACCOUNT_INACTIVE,
                    message=ACCOUNT_INACTIVE_MESSAGE,
                )
            )

        now = self._clock()
        access_token = self._tokens.issue_access_token(user.id, user.email, user.role)
        refresh_token = self._tokens.issue_refresh_token()
        user.set_refresh_token(refresh_token, self._tokens.refresh_expiry(now), at=now)
        await self._users.update(user)

        logger.info("Login exitoso", extra={"user_id": str(user.id)})
        record_login("success")
        return AuthResult(
            tokens=AuthTokens(
                access_token=access_token,
                refresh_token=refresh_token,
                expires_in_seconds=self._tokens.access_ttl_seconds,
                issued_at=now,
            )
        )

    @staticmethod
    def _invalid_credentials(*, reason: str) -> AuthResult:
        logger.warning("Login fallido", extra={"reason": reason})
        record_login("invalid_credentials")
        return AuthResult(
            error=AuthError(
                code=AuthErrorCode.INVALID_CREDENTIALS,
                message=INVALID_CREDENTIALS_MESSAGE,
            )
        )
