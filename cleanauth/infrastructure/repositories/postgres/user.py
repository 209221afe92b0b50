"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar, crear y actualizar usuarios en la tabla `users`.
  - Rotar refresh tokens con un UPDATE condicional (compare-and-swap).
  - Mapear filas crudas -> entidad de dominio `User`.
  - Exponer fallos consistentes vía `DatabaseError` con logging estructurado.

Collaborators:
  - psycopg_pool.AsyncConnectionPool (pool de conexiones)
  - infrastructure.db.pool.get_pool (accesor del pool global)
  - domain.entities.User / EntityStamp
  - crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio.
  - Retorna None cuando no existe el recurso.
  - SQL parametrizado siempre (nunca interpolar input de usuario).
  - `async with pool.connection()` = una transacción: commit al salir,
    rollback ante error o cancelación.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from psycopg import Error as PsycopgError
from psycopg.errors import UniqueViolation
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import EntityStamp, User
from ....domain.errors import EmailAlreadyExistsError
from ...db.errors import DatabasePoolError

# ============================================================
# Constantes y contratos de SQL
# ============================================================
# R: Lista explícita de columnas (contrato con la migración 001_users).
_USER_COLUMNS = (
    "id, email, first_name, last_name, password_hash, role, is_active, "
    "refresh_token, refresh_token_expires_at, created_at, updated_at"
)


def _row_to_user(row: tuple) -> User:
    return User(
        email=row[1],
        first_name=row[2],
        last_name=row[3],
        password_hash=row[4],
        role=row[5],
        is_active=row[6],
        refresh_token=row[7],
        refresh_token_expires_at=row[8],
        stamp=EntityStamp(id=row[0], created_at=row[9], updated_at=row[10]),
    )


class PostgresUserRepository:
    def __init__(self, pool: AsyncConnectionPool | None = None) -> None:
        self._pool = pool

    def _get_pool(self) -> AsyncConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    # ============================================================
    # Helpers internos: ejecución
    # ============================================================
    async def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        """SELECT/UPDATE ... RETURNING con manejo consistente de errores."""
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(query, tuple(params))
                return await cur.fetchone()
        except (PsycopgError, DatabasePoolError) as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(log_msg, original_error=exc) from exc

    async def _execute(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> None:
        try:
            async with self._get_pool().connection() as conn:
                await conn.execute(query, tuple(params))
        except (PsycopgError, DatabasePoolError) as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(log_msg, original_error=exc) from exc

    # ============================================================
    # API del repositorio
    # ============================================================
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        row = await self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            log_msg="PostgresUserRepository: get_by_id failed",
            log_extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        # R: match exacto; la política de normalización vive fuera del repo.
        row = await self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            params=(email,),
            log_msg="PostgresUserRepository: get_by_email failed",
            log_extra={},
        )
        return _row_to_user(row) if row else None

    async def email_exists(self, email: str) -> bool:
        row = await self._fetchone(
            query="SELECT 1 FROM users WHERE email = %s",
            params=(email,),
            log_msg="PostgresUserRepository: email_exists failed",
            log_extra={},
        )
        return row is not None

    async def add(self, user: User) -> None:
        try:
            async with self._get_pool().connection() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO users ({_USER_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        user.id,
                        user.email,
                        user.first_name,
                        user.last_name,
                        user.password_hash,
                        user.role,
                        user.is_active,
                        user.refresh_token,
                        user.refresh_token_expires_at,
                        user.created_at,
                        user.updated_at,
                    ),
                )
        except UniqueViolation as exc:
            raise EmailAlreadyExistsError(user.email) from exc
        except (PsycopgError, DatabasePoolError) as exc:
            logger.exception(
                "PostgresUserRepository: add failed",
                extra={"user_id": str(user.id), "error": str(exc)},
            )
            raise DatabaseError(
                "PostgresUserRepository: add failed", original_error=exc
            ) from exc

    async def update(self, user: User) -> None:
        await self._execute(
            query="""
                UPDATE users
                SET first_name = %s,
                    last_name = %s,
                    password_hash = %s,
                    role = %s,
                    is_active = %s,
                    refresh_token = %s,
                    refresh_token_expires_at = %s,
                    updated_at = %s
                WHERE id = %s
            """,
            params=(
                user.first_name,
                user.last_name,
                user.password_hash,
                user.role,
                user.is_active,
                user.refresh_token,
                user.refresh_token_expires_at,
                user.updated_at,
                user.id,
            ),
            log_msg="PostgresUserRepository: update failed",
            log_extra={"user_id": str(user.id)},
        )

    async def rotate_refresh_token(
        self,
        presented: str,
        new_token: str,
        new_expires_at: datetime,
        now: datetime,
    ) -> Optional[User]:
        # R: compare-and-swap; una sola fila puede matchear el token presentado.
        row = await self._fetchone(
            query=f"""
                UPDATE users
                SET refresh_token = %s,
                    refresh_token_expires_at = %s,
                    updated_at = %s
                WHERE refresh_token = %s
                  AND refresh_token_expires_at > %s
                  AND is_active
                RETURNING {_USER_COLUMNS}
            """,
            params=(new_token, new_expires_at, now, presented, now),
            log_msg="PostgresUserRepository: rotate_refresh_token failed",
            log_extra={},
        )
        return _row_to_user(row) if row else None
