"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Conversión claims (auth) -> UserActor (policy de usuarios).
  - Dependency compartida de autenticación para routers.

Colaboradores:
  - identity.auth_users.require_user
  - application.usecases.users.UserActor
===============================================================================
"""

from __future__ import annotations

from ....application.usecases import UserActor
from ....domain.entities import AccessTokenClaims
from ....identity.auth_users import require_user

current_claims = require_user()


def to_user_actor(claims: AccessTokenClaims | None) -> UserActor | None:
    if claims is None:
        return None
    return UserActor(user_id=claims.subject, role=claims.role)
