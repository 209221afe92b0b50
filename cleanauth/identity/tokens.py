"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Emisión y validación de tokens (JWT de acceso + refresh opaco)

Responsabilidades:
    - Emitir access tokens HS256 firmados (sub, email, role, iat, exp, iss, aud).
    - Emitir refresh tokens opacos (64 bytes aleatorios, base64).
    - Validar access tokens: firma, iss, aud, exp (sin leeway) y claims mínimos.

Colaboradores:
    - crosscutting.config.Settings.to_jwt_settings(): snapshot inmutable
    - application/usecases/auth/*: login / refresh
    - identity/auth_users.py: dependencia FastAPI require_user

Decisiones:
    - Settings se leen una sola vez al construir el TokenIssuer.
    - validate_access_token nunca lanza: devuelve None y loguea el motivo en debug.
    - El reloj es inyectable (tests de expiración sin sleeps).
===============================================================================
"""

from __future__ import annotations

import base64
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

import jwt

from ..crosscutting.logger import logger
from ..domain.entities import AccessTokenClaims, utcnow

JWT_ALGORITHM: str = "HS256"
REFRESH_TOKEN_BYTES: int = 64

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_ISS: str = "iss"
CLAIM_AUD: str = "aud"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"

_REQUIRED_CLAIMS = [CLAIM_SUB, CLAIM_EMAIL, CLAIM_ROLE, CLAIM_IAT, CLAIM_EXP]

Clock = Callable[[], datetime]


@dataclass(frozen=True, slots=True)
class JwtSettings:
    """Settings de JWT (snapshot)."""

    secret: str
    issuer: str
    audience: str
    access_ttl_minutes: int = 15
    refresh_ttl_days: int = 7
    algorithm: str = JWT_ALGORITHM


class TokenIssuer:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TokenIssuer

    Responsabilidades:
      - issue_access_token / issue_refresh_token
      - validate_access_token -> AccessTokenClaims | None
      - Exponer TTLs (expires_in y expiración de refresh)

    Colaboradores:
      - PyJWT
    ----------------------------------------------------------------------------
    """

    def __init__(self, settings: JwtSettings, clock: Clock = utcnow):
        self._settings = settings
        self._clock = clock

    @property
    def access_ttl_seconds(self) -> int:
        return int(self._settings.access_ttl_minutes * 60)

    def refresh_expiry(self, now: datetime) -> datetime:
        return now + timedelta(days=self._settings.refresh_ttl_days)

    def issue_access_token(self, user_id: UUID, email: str, role: str) -> str:
        now = self._clock()
        payload: dict[str, object] = {
            CLAIM_SUB: str(user_id),
            CLAIM_EMAIL: email,
            CLAIM_ROLE: role,
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int(now.timestamp()) + self.access_ttl_seconds,
            CLAIM_ISS: self._settings.issuer,
            CLAIM_AUD: self._settings.audience,
            CLAIM_TYP: TOKEN_TYPE_ACCESS,
        }
        return jwt.encode(
            payload, self._settings.secret, algorithm=self._settings.algorithm
        )

    @staticmethod
    def issue_refresh_token() -> str:
        return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode(
            "ascii"
        )

    def validate_access_token(self, token: str) -> AccessTokenClaims | None:
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[self._settings.algorithm],
                audience=self._settings.audience,
                issuer=self._settings.issuer,
                # R: exp/iat se validan contra el reloj inyectado (abajo).
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.debug("Access token rechazado", extra={"reason": type(exc).__name__})
            return None

        now_ts = int(self._clock().timestamp())
        try:
            exp = int(payload[CLAIM_EXP])
            iat = int(payload[CLAIM_IAT])
            subject = UUID(str(payload[CLAIM_SUB]))
        except (TypeError, ValueError):
            logger.debug("Access token rechazado", extra={"reason": "malformed_claims"})
            return None

        # Sin leeway: exp == now ya está vencido.
        if exp <= now_ts:
            logger.debug("Access token rechazado", extra={"reason": "expired"})
            return None

        token_type = payload.get(CLAIM_TYP)
        if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
            logger.debug("Access token rechazado", extra={"reason": "wrong_type"})
            return None

        email = payload.get(CLAIM_EMAIL)
        role = payload.get(CLAIM_ROLE)
        if not email or not role:
            logger.debug("Access token rechazado", extra={"reason": "missing_claims"})
            return None

        return AccessTokenClaims(
            subject=subject,
            email=str(email),
            role=str(role),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            issuer=self._settings.issuer,
            audience=self._settings.audience,
        )
