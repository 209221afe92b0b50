"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI.
  - Centralizar responses de error para OpenAPI.
  - Componer routers por feature (auth / users).

Patrones aplicados:
  - Factory: build_router() para testear composición sin side-effects.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.auth import router as auth_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(auth_router)
    api_router.include_router(users_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
