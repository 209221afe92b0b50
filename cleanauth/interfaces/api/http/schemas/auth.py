"""
===============================================================================
TARJETA CRC — schemas/auth.py
===============================================================================

Módulo:
    Schemas HTTP para autenticación

Responsabilidades:
    - DTOs de request/response de /auth/login y /auth/refresh.
    - La validación de negocio (token vacío, credenciales) vive en los use cases.

Colaboradores:
    - domain.entities.AuthTokens
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .....domain.entities import AuthTokens
from .base import CamelModel


class LoginReq(CamelModel):
    email: str = Field(..., max_length=320)
    password: str = Field(..., max_length=1024)


class RefreshTokenReq(CamelModel):
    # R: vacío llega al use case (400 con mensaje propio).
    refresh_token: str = Field(default="", max_length=1024)


class AuthTokenRes(CamelModel):
    access_token: str
    refresh_token: str
    expires_in_seconds: int
    issued_at_utc: datetime

    @classmethod
    def from_tokens(cls, tokens: AuthTokens) -> "AuthTokenRes":
        return cls(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_in_seconds=tokens.expires_in_seconds,
            issued_at_utc=tokens.issued_at,
        )
