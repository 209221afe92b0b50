"""
===============================================================================
USE CASE: Deactivate User
===============================================================================

Business Goal:
    Desactivar una cuenta (nunca se borra). Limpia el refresh token, así que
    un refresh posterior con el token viejo es rechazado.

Error Mapping:
    - FORBIDDEN: actor distinto y no Admin
    - NOT_FOUND: usuario inexistente
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import UserReadModel, utcnow
from ....domain.repositories import UserRepository
from .user_access import UserActor, can_manage_user
from .user_results import UserError, UserErrorCode, UserResult, user_not_found


@dataclass(frozen=True)
class DeactivateUserInput:
    user_id: UUID
    actor: UserActor | None = None


class DeactivateUserUseCase:
    def __init__(self, repository: UserRepository, clock: Callable = utcnow) -> None:
        self._users = repository
        self._clock = clock

    async def execute(self, input_data: DeactivateUserInput) -> UserResult:
        if not can_manage_user(input_data.actor, input_data.user_id):
            return UserResult(
                error=UserError(
                    code=UserErrorCode.FORBIDDEN,
                    message="You are not allowed to modify this user",
                )
            )

        user = await self._users.get_by_id(input_data.user_id)
        if user is None:
            return user_not_found(input_data.user_id)

        # Idempotente: desactivar dos veces no es error.
        if user.is_active:
            user.deactivate(at=self._clock())
            await self._users.update(user)
            logger.info(
                "Usuario desactivado",
                extra={
                    "user_id": str(user.id),
                    "actor_id": str(input_data.actor.user_id),
                },
            )
        return UserResult(user=UserReadModel.from_user(user))
