"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (User, UserRole, UserReadModel, tokens)

Responsabilidades:
    - Definir el agregado User y sus invariantes.
    - Proveer el read model cacheable (sin hash ni refresh token).
    - Definir los valores de autenticación (claims y par de tokens).

Colaboradores:
    - domain.repositories: persisten/recuperan User.
    - application/usecases: construyen/consumen estas entidades.
    - interfaces/api: serializan el read model como UserDto.

Principios:
    - Sin dependencias a DB/Redis/FastAPI.
    - Identidad y timestamps se componen por valor (EntityStamp), no por herencia.
    - Un usuario nunca se borra: se desactiva.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from .errors import DomainError


def utcnow() -> datetime:
    """Fecha/hora UTC."""
    return datetime.now(timezone.utc)


def _require(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise DomainError(message, code="VALIDATION_ERROR")
    return value


# ---------------------------------------------------------------------------
# EntityStamp
# ---------------------------------------------------------------------------


@dataclass
class EntityStamp:
    """Identidad + timestamps de una entidad."""

    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def touch(self, at: datetime | None = None) -> None:
        self.updated_at = at or utcnow()


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


class UserRole(str, Enum):
    """Roles soportados (se persisten como string)."""

    USER = "User"
    ADMIN = "Admin"


@dataclass
class User:
    """
    Agregado de usuario.

    Invariantes:
      - email, nombres y password_hash no vacíos.
      - refresh_token y refresh_token_expires_at se setean y limpian juntos.
    """

    email: str
    first_name: str
    last_name: str
    password_hash: str
    role: str = UserRole.USER.value
    is_active: bool = True
    refresh_token: Optional[str] = None
    refresh_token_expires_at: Optional[datetime] = None
    stamp: EntityStamp = field(default_factory=EntityStamp)

    @classmethod
    def create(
        cls,
        email: str,
        first_name: str,
        last_name: str,
        password_hash: str,
        *,
        now: datetime | None = None,
    ) -> "User":
        _require(email, "Email cannot be empty")
        _require(first_name, "First name cannot be empty")
        _require(last_name, "Last name cannot be empty")
        _require(password_hash, "Password hash cannot be empty")
        return cls(
            email=email.strip(),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            password_hash=password_hash,
            stamp=EntityStamp(created_at=now or utcnow()),
        )

    # R: atajos de lectura sobre el stamp
    @property
    def id(self) -> UUID:
        return self.stamp.id

    @property
    def created_at(self) -> datetime:
        return self.stamp.created_at

    @property
    def updated_at(self) -> Optional[datetime]:
        return self.stamp.updated_at

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def update_profile(
        self, first_name: str, last_name: str, *, at: datetime | None = None
    ) -> None:
        _require(first_name, "First name cannot be empty")
        _require(last_name, "Last name cannot be empty")
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()
        self.stamp.touch(at)

    def set_refresh_token(
        self, token: str, expires_at: datetime, *, at: datetime | None = None
    ) -> None:
        _require(token, "Refresh token cannot be empty")
        self.refresh_token = token
        self.refresh_token_expires_at = expires_at
        self.stamp.touch(at)

    def clear_refresh_token(self, *, at: datetime | None = None) -> None:
        self.refresh_token = None
        self.refresh_token_expires_at = None
        self.stamp.touch(at)

    def is_refresh_token_valid(self, now: datetime | None = None) -> bool:
        if not self.refresh_token or self.refresh_token_expires_at is None:
            return False
        return self.refresh_token_expires_at > (now or utcnow())

    def deactivate(self, *, at: datetime | None = None) -> None:
        self.is_active = False
        # Sin sesión: el refresh token deja de servir.
        self.clear_refresh_token(at=at)

    def assign_role(self, role: str | UserRole, *, at: datetime | None = None) -> None:
        value = role.value if isinstance(role, UserRole) else role
        self.role = _require(value, "Role cannot be empty").strip()
        self.stamp.touch(at)


# ---------------------------------------------------------------------------
# Read model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UserReadModel:
    """
    Proyección pública de User (UserDto).

    Nunca incluye password_hash ni refresh_token.
    """

    id: UUID
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserReadModel":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Dict JSON-safe (para cache)."""
        return {
            "id": str(self.id),
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserReadModel":
        updated_at = data.get("updated_at")
        return cls(
            id=UUID(str(data["id"])),
            email=data["email"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            role=data["role"],
            is_active=bool(data["is_active"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccessTokenClaims:
    """Claims verificados de un access token."""

    subject: UUID
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime
    issuer: str
    audience: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


@dataclass(frozen=True)
class AuthTokens:
    """Par de tokens emitido por login/refresh."""

    access_token: str
    refresh_token: str
    expires_in_seconds: int
    issued_at: datetime
