"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev sin DATABASE_URL).
  - Replicar el contrato de PostgresUserRepository: email único,
    rotación atómica del refresh token.
  - Contar lecturas del store (read_count) para verificar el cache-aside.

Collaborators:
  - domain.entities.User
  - domain.repositories.UserRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: cada operación corre bajo Lock y sin awaits adentro,
    así una rotación es un compare-and-swap indivisible.
  - Copias defensivas: el caller nunca comparte instancias con el store.
============================================================
"""

from __future__ import annotations

import copy
from datetime import datetime
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import User
from ....domain.errors import EmailAlreadyExistsError


class InMemoryUserRepository:
    """
    Modelo mental:
    - _users es la "tabla" (UUID -> User).
    - _by_email es el índice único (email -> UUID).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}
        self._by_email: Dict[str, UUID] = {}
        self.read_count = 0

    @staticmethod
    def _copy(user: User) -> User:
        return copy.deepcopy(user)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            self.read_count += 1
            user = self._users.get(user_id)
            return self._copy(user) if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            self.read_count += 1
            user_id = self._by_email.get(email)
            return self._copy(self._users[user_id]) if user_id else None

    async def email_exists(self, email: str) -> bool:
        with self._lock:
            return email in self._by_email

    async def add(self, user: User) -> None:
        with self._lock:
            if user.email in self._by_email:
                raise EmailAlreadyExistsError(user.email)
            self._users[user.id] = self._copy(user)
            self._by_email[user.email] = user.id

    async def update(self, user: User) -> None:
        with self._lock:
            current = self._users.get(user.id)
            if current is None:
                return
            if current.email != user.email:
                owner = self._by_email.get(user.email)
                if owner is not None and owner != user.id:
                    raise EmailAlreadyExistsError(user.email)
                self._by_email.pop(current.email, None)
                self._by_email[user.email] = user.id
            self._users[user.id] = self._copy(user)

    async def rotate_refresh_token(
        self,
        presented: str,
        new_token: str,
        new_expires_at: datetime,
        now: datetime,
    ) -> Optional[User]:
        with self._lock:
            for stored in self._users.values():
                if (
                    stored.is_active
                    and stored.refresh_token == presented
                    and stored.is_refresh_token_valid(now)
                ):
                    stored.set_refresh_token(new_token, new_expires_at, at=now)
                    return self._copy(stored)
            return None
