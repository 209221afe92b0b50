"""
===============================================================================
USER ACCESS POLICY
===============================================================================

Regla única de autorización sobre usuarios: un actor puede modificar un
usuario si es él mismo o si tiene rol Admin.

Collaborators:
    - update_profile.py / deactivate_user.py
    - interfaces/api/http/routers/users.py (construye UserActor desde claims)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....domain.entities import UserRole


@dataclass(frozen=True)
class UserActor:
    """Quién ejecuta la acción (resuelto desde el access token)."""

    user_id: UUID
    role: str


def can_manage_user(actor: UserActor | None, target_user_id: UUID) -> bool:
    if actor is None:
        return False
    if actor.role == UserRole.ADMIN.value:
        return True
    return actor.user_id == target_user_id
