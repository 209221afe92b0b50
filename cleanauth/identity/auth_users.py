"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de requests (Bearer JWT)

Responsabilidades:
    - Extraer token desde `Authorization: Bearer <jwt>`.
    - Exponer la dependencia FastAPI require_user.
    - Respuesta 401 uniforme: nunca revela por qué el token es inválido.

Colaboradores:
    - identity.tokens.TokenIssuer (vía container.get_token_issuer)
    - crosscutting.error_responses: unauthorized estándar.

Decisiones:
    - require_user es stateless: valida el JWT y devuelve los claims.
      Los casos de uso que necesitan el usuario lo leen del store.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ..crosscutting.error_responses import unauthorized
from ..domain.entities import AccessTokenClaims
from .tokens import TokenIssuer

UNAUTHENTICATED_MESSAGE = "Unauthenticated"


def _token_issuer() -> TokenIssuer:
    # Import local: container importa este módulo (routers).
    from ..container import get_token_issuer

    return get_token_issuer()


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_user() -> Callable:
    """Dependency FastAPI: requiere access token válido."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        issuer: TokenIssuer = Depends(_token_issuer),
    ) -> AccessTokenClaims:
        token = _extract_bearer_token(authorization)
        claims = issuer.validate_access_token(token) if token else None
        if claims is None:
            raise unauthorized(UNAUTHENTICATED_MESSAGE)

        request.state.principal = claims
        return claims

    return dependency

