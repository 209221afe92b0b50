"""
============================================================
TARJETA CRC — infrastructure/cache.py
============================================================
Componente:
  Cache de read models (in-memory / Redis / null)

Responsabilidades:
  - Implementar CachePort con TTL por entrada.
  - Convertir cualquier falla del backend en miss (cache best-effort).
  - Elegir backend UNA sola vez al construir (build_cache).

Colaboradores:
  - domain/cache.py (CachePort)
  - crosscutting/config.py (Settings: cache_backend / redis_url)
  - application/usecases/users/get_user.py

Notas:
  - En memoria: TTL con reloj monotónico inyectable (tests sin sleeps).
  - En Redis: TTL nativo (SET ... EX), valores JSON.
============================================================
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger


# ============================================================
# Entry con TTL (in-memory)
# ============================================================
@dataclass(frozen=True, slots=True)
class CacheEntry:
    """
    Invariante:
      - expires_at es tiempo monotónico (segundos).
    """

    value: Dict[str, Any]
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


# ============================================================
# In-memory backend
# ============================================================
class InMemoryCache:
    """
    Cache en memoria con TTL por entrada y Lock.

    Nota:
      - Para dev/tests. NO comparte estado entre procesos.
    """

    available = True

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = Lock()

        # stats
        self._hits = 0
        self._misses = 0
        self._expired = 0

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(now):
                self._entries.pop(key, None)
                self._expired += 1
                self._misses += 1
                return None

            self._hits += 1
            # Copia: el caller no puede mutar lo cacheado.
            return dict(entry.value)

    async def set(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = CacheEntry(
                value=dict(value), expires_at=self._clock() + ttl_seconds
            )

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def stats(self) -> dict:
        with self._lock:
            return {
                "backend": "in-memory",
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "expired": self._expired,
            }


# ============================================================
# Redis backend (TTL nativo + namespace)
# ============================================================
class RedisCache:
    """
    Cache Redis (redis.asyncio).

    - Compartible entre workers; TTL nativo por clave.
    - Si Redis falla: get => miss, set/delete => se ignora (best-effort).
    """

    CACHE_PREFIX = "cleanauth:"

    def __init__(self, client: "aioredis.Redis", *, available: bool = True) -> None:
        self._client = client
        self.available = available

        # stats
        self._hits = 0
        self._misses = 0
        self._errors = 0

    @classmethod
    def from_url(cls, redis_url: str) -> "RedisCache":
        if not redis_url:
            raise ValueError("redis_url is required")
        return cls(aioredis.from_url(redis_url, decode_responses=True))

    def _k(self, key: str) -> str:
        return f"{self.CACHE_PREFIX}{key}"

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError) as exc:
            logger.warning("Redis no disponible", extra={"error": str(exc)})
            return False

    async def connect(self) -> bool:
        """
        Ping único al arrancar. Si falla, el cache queda deshabilitado
        (se comporta como NullCache) por toda la vida del proceso.
        """
        self.available = await self.ping()
        if self.available:
            logger.info("Cache Redis conectado")
        else:
            logger.warning("Redis no respondió al ping; cache deshabilitado")
        return self.available

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        if not self.available:
            return None
        try:
            data = await self._client.get(self._k(key))
        except (RedisError, OSError) as exc:
            self._errors += 1
            self._misses += 1
            logger.warning("Cache get falló", extra={"key": key, "error": str(exc)})
            return None

        if data is None:
            self._misses += 1
            return None

        try:
            value = json.loads(data)
        except ValueError:
            self._misses += 1
            return None
        if not isinstance(value, dict):
            self._misses += 1
            return None

        self._hits += 1
        return value

    async def set(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        if not self.available:
            return
        try:
            await self._client.set(self._k(key), json.dumps(value), ex=int(ttl_seconds))
        except (RedisError, OSError) as exc:
            self._errors += 1
            logger.warning("Cache set falló", extra={"key": key, "error": str(exc)})

    async def delete(self, key: str) -> None:
        if not self.available:
            return
        try:
            await self._client.delete(self._k(key))
        except (RedisError, OSError) as exc:
            self._errors += 1
            logger.warning("Cache delete falló", extra={"key": key, "error": str(exc)})

    async def close(self) -> None:
        await self._client.aclose()

    def stats(self) -> dict:
        return {
            "backend": "redis",
            "hits": self._hits,
            "misses": self._misses,
            "errors": self._errors,
        }


# ============================================================
# Null backend
# ============================================================
class NullCache:
    """Cache deshabilitado: siempre miss."""

    available = False

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        return None

    async def set(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None

    def stats(self) -> dict:
        return {"backend": "none"}


# ============================================================
# Factory (se decide una vez al arrancar)
# ============================================================
def build_cache(settings: Settings):
    """
    Selección:
      - CACHE_BACKEND=memory -> InMemoryCache
      - CACHE_BACKEND=none -> NullCache
      - REDIS_URL presente (o CACHE_BACKEND=redis) -> RedisCache
      - resto -> NullCache

    El ping a Redis ocurre en RedisCache.connect() durante el lifespan.
    """
    backend = settings.cache_backend
    if backend == "memory":
        return InMemoryCache()
    if backend == "none":
        return NullCache()
    if settings.redis_url:
        return RedisCache.from_url(settings.redis_url)
    if backend == "redis":
        logger.warning("CACHE_BACKEND=redis sin REDIS_URL; cache deshabilitado")
    return NullCache()

