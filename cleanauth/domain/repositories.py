"""
===============================================================================
TARJETA CRC — domain/repositories.py
===============================================================================

Módulo:
    Puertos de Persistencia (Protocols)

Responsabilidades:
    - Definir el contrato del store de usuarios.
    - Permitir intercambiar backends (in-memory / Postgres) sin tocar casos de uso.

Colaboradores:
    - infrastructure/repositories/in_memory/user.py
    - infrastructure/repositories/postgres/user.py
    - application/usecases/*

Reglas:
    - Async: una request cancelada no deja escrituras a medias.
    - rotate_refresh_token es atómico: de dos rotaciones concurrentes del
      mismo token, a lo sumo una tiene éxito.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID

from .entities import User


class UserRepository(Protocol):
    """Store durable de usuarios."""

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        """Match exacto (case-sensitive)."""
        ...

    async def email_exists(self, email: str) -> bool:
        ...

    async def add(self, user: User) -> None:
        """
        Persiste un usuario nuevo.

        Raises:
            EmailAlreadyExistsError: si el email ya está registrado
        """
        ...

    async def update(self, user: User) -> None:
        ...

    async def rotate_refresh_token(
        self,
        presented: str,
        new_token: str,
        new_expires_at: datetime,
        now: datetime,
    ) -> Optional[User]:
        """
        Reemplaza atómicamente el refresh token `presented` por `new_token`.

        Solo matchea un usuario activo cuyo token sea `presented` y no haya
        expirado a `now`. Devuelve el usuario actualizado o None.
        """
        ...
