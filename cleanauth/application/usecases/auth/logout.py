"""
===============================================================================
USE CASE: Logout
===============================================================================

Business Goal:
    Cerrar la sesión del usuario autenticado: su refresh token deja de
    servir. Los access tokens ya emitidos siguen vigentes hasta su exp.

Collaborators:
    - UserRepository: get_by_id, update
===============================================================================
"""

from __future__ import annotations

from typing import Callable
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import utcnow
from ....domain.repositories import UserRepository
from .auth_results import AuthError, AuthErrorCode, LogoutResult


class LogoutUseCase:
    def __init__(self, repository: UserRepository, clock: Callable = utcnow) -> None:
        self._users = repository
        self._clock = clock

    async def execute(self, user_id: UUID) -> LogoutResult:
        user = await self._users.get_by_id(user_id)
        if user is None:
            return LogoutResult(
                error=AuthError(code=AuthErrorCode.NOT_FOUND, message="User not found")
            )

        user.clear_refresh_token(at=self._clock())
        await self._users.update(user)
        logger.info("Logout", extra={"user_id": str(user_id)})
        return LogoutResult(logged_out=True)
