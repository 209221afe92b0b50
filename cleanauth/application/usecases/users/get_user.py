"""
===============================================================================
USE CASE: Get User By Id (cache-aside)
===============================================================================

Business Goal:
    Leer el read model de un usuario minimizando lecturas al store.

Flow:
    1) key = "user:{id}"; hit -> devolver sin tocar el store.
    2) miss -> store; None -> NOT_FOUND.
    3) proyectar a read model, guardar en cache con TTL, devolver.

Notas:
    - Un cache caído es un miss (lo garantizan los backends).
    - Las escrituras NO invalidan la entrada: la ventana de datos viejos es
      a lo sumo el TTL.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_user_cache_hit, record_user_cache_miss
from ....domain.cache import CachePort
from ....domain.entities import UserReadModel
from ....domain.repositories import UserRepository
from .user_results import UserResult, user_not_found

USER_CACHE_KEY_PREFIX = "user:"
DEFAULT_USER_CACHE_TTL_SECONDS = 15 * 60


def user_cache_key(user_id: UUID) -> str:
    return f"{USER_CACHE_KEY_PREFIX}{user_id}"


class GetUserByIdUseCase:
    def __init__(
        self,
        repository: UserRepository,
        cache: CachePort,
        ttl_seconds: int = DEFAULT_USER_CACHE_TTL_SECONDS,
    ) -> None:
        self._users = repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    async def execute(self, user_id: UUID) -> UserResult:
        key = user_cache_key(user_id)

        cached = await self._cache.get(key)
        if cached is not None:
            try:
                model = UserReadModel.from_dict(cached)
            except (KeyError, TypeError, ValueError):
                # Entrada corrupta: se trata como miss y se sobreescribe.
                logger.warning("Entrada de cache inválida", extra={"key": key})
            else:
                record_user_cache_hit()
                logger.debug("Cache hit", extra={"key": key})
                return UserResult(user=model)

        record_user_cache_miss()
        logger.debug("Cache miss", extra={"key": key})

        user = await self._users.get_by_id(user_id)
        if user is None:
            return user_not_found(user_id)

        model = UserReadModel.from_user(user)
        await self._cache.set(key, model.to_dict(), self._ttl_seconds)
        return UserResult(user=model)
