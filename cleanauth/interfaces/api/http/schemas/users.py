"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para usuarios

Responsabilidades:
    - DTOs de request/response de /users.
    - UserDto nunca expone password_hash ni refresh_token.

Colaboradores:
    - domain.entities.UserReadModel
    - application/usecases/users (reglas de validación por campo)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from .....domain.entities import UserReadModel
from .base import CamelModel


class CreateUserReq(CamelModel):
    """Defaults vacíos: el use case devuelve los errores por campo."""

    email: str = ""
    first_name: str = ""
    last_name: str = ""
    password: str = ""


class UpdateUserProfileReq(CamelModel):
    first_name: str = ""
    last_name: str = ""


class UserRes(CamelModel):
    id: UUID
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, model: UserReadModel) -> "UserRes":
        return cls(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
