"""
===============================================================================
TARJETA CRC — domain/cache.py
===============================================================================

Módulo:
    Puerto de Cache de Read Models (Dominio)

Responsabilidades:
    - Definir el contrato (Protocol) del cache clave/valor con TTL.
    - Habilitar Inversión de Dependencias:
        * application/usecases depende de esta interfaz
        * infrastructure/cache implementa backends concretos (memoria / Redis / null)

Restricciones / Reglas:
    - Este módulo ES dominio: no importa Redis ni métricas.
    - Valores: dicts JSON-safe (el backend decide la serialización).
    - Un cache caído se comporta como miss; nunca rompe la request.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """
    Interfaz de cache.

    Semántica:
      - get(key) retorna None si no existe / expiró / el backend falló
      - set(key, value, ttl_seconds) guarda o sobreescribe la entrada
      - delete(key) es idempotente
      - available indica si el backend quedó habilitado al construirse
    """

    available: bool

    async def get(self, key: str) -> dict[str, Any] | None:
        ...

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...
