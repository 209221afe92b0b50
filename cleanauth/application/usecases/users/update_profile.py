"""
===============================================================================
USE CASE: Update User Profile
===============================================================================

Business Goal:
    Editar nombre y apellido. Solo el propio usuario o un Admin.

Error Mapping:
    - FORBIDDEN: actor distinto y no Admin
    - NOT_FOUND: usuario inexistente
    - VALIDATION_ERROR: nombres inválidos
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from uuid import UUID

from ....domain.entities import UserReadModel, utcnow
from ....domain.repositories import UserRepository
from .create_user import VALIDATION_MESSAGE, validate_name
from .user_access import UserActor, can_manage_user
from .user_results import UserError, UserErrorCode, UserResult, user_not_found


@dataclass(frozen=True)
class UpdateUserProfileInput:
    user_id: UUID
    first_name: str
    last_name: str
    actor: UserActor | None = None


class UpdateUserProfileUseCase:
    def __init__(self, repository: UserRepository, clock: Callable = utcnow) -> None:
        self._users = repository
        self._clock = clock

    async def execute(self, input_data: UpdateUserProfileInput) -> UserResult:
        if not can_manage_user(input_data.actor, input_data.user_id):
            return UserResult(
                error=UserError(
                    code=UserErrorCode.FORBIDDEN,
                    message="You are not allowed to modify this user",
                )
            )

        errors: dict[str, list[str]] = {}
        if messages := validate_name(input_data.first_name, "First name"):
            errors["firstName"] = messages
        if messages := validate_name(input_data.last_name, "Last name"):
            errors["lastName"] = messages
        if errors:
            return UserResult(
                error=UserError(
                    code=UserErrorCode.VALIDATION_ERROR,
                    message=VALIDATION_MESSAGE,
                    errors=errors,
                )
            )

        user = await self._users.get_by_id(input_data.user_id)
        if user is None:
            return user_not_found(input_data.user_id)

        user.update_profile(input_data.first_name, input_data.last_name, at=self._clock())
        await self._users.update(user)
        return UserResult(user=UserReadModel.from_user(user))
