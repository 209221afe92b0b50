"""
===============================================================================
USE CASE: Refresh Token
===============================================================================

Business Goal:
    Canjear un refresh token válido por un par de tokens nuevo. El token
    presentado queda invalidado (rotación de un solo uso).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RefreshTokenUseCase

Responsibilities:
    - Rechazar input vacío.
    - Rotar atómicamente el refresh token en el store.
    - Emitir el access token a partir del usuario resuelto por el store
      (nunca desde claims de otro token).

Collaborators:
    - UserRepository.rotate_refresh_token (compare-and-swap)
    - TokenIssuer

Error Mapping:
    - VALIDATION_ERROR: refresh token vacío
    - UNAUTHORIZED: desconocido, expirado, ya rotado o cuenta inactiva
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_refresh
from ....domain.entities import AuthTokens, utcnow
from ....domain.repositories import UserRepository
from ....identity.tokens import TokenIssuer
from .auth_results import AuthError, AuthErrorCode, AuthResult

REFRESH_TOKEN_REQUIRED_MESSAGE = "Refresh token is required"
INVALID_REFRESH_TOKEN_MESSAGE = "Invalid or expired refresh token"


@dataclass(frozen=True)
class RefreshTokenInput:
    refresh_token: str


class RefreshTokenUseCase:
    def __init__(
        self,
        repository: UserRepository,
        tokens: TokenIssuer,
        clock: Callable = utcnow,
    ) -> None:
        self._users = repository
        self._tokens = tokens
        self._clock = clock

    async def execute(self, input_data: RefreshTokenInput) -> AuthResult:
        presented = (input_data.refresh_token or "").strip()
        if not presented:
            record_refresh("invalid_input")
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.VALIDATION_ERROR,
                    message=REFRESH_TOKEN_REQUIRED_MESSAGE,
                )
            )

        now = self._clock()
        new_refresh_token = self._tokens.issue_refresh_token()
        user = await self._users.rotate_refresh_token(
            presented,
            new_refresh_token,
            self._tokens.refresh_expiry(now),
            now,
        )
        if user is None:
            logger.warning("Refresh rechazado")
            record_refresh("rejected")
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.UNAUTHORIZED,
                    message=INVALID_REFRESH_TOKEN_MESSAGE,
                )
            )

        access_token = self._tokens.issue_access_token(user.id, user.email, user.role)
        record_refresh("success")
        return AuthResult(
            tokens=AuthTokens(
                access_token=access_token,
                refresh_token=new_refresh_token,
                expires_in_seconds=self._tokens.access_ttl_seconds,
                issued_at=now,
            )
        )
