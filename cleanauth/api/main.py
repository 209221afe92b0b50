"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app) with middleware and routers
  - Own the process lifecycle: DB pool, cache connection, email dispatcher
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware / RequestContextMiddleware
  - interfaces.api.http.router: /auth and /users endpoints
  - container: singletons (cache, dispatcher, token issuer)

Notes:
  - Middleware order matters: CORS → RequestContext → routes
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics
  - Settings are validated at startup (lifespan); missing JWT_* aborts the process
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import (
    get_cache,
    get_email_dispatcher,
    get_token_issuer,
    uses_in_memory_store,
)
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.cache import RedisCache
from ..infrastructure.db.pool import (
    close_pool,
    get_pool,
    init_pool,
    is_pool_initialized,
)
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()

    # R: fail-fast si la config de JWT es inválida.
    get_token_issuer()

    if not uses_in_memory_store():
        await init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    cache = get_cache()
    if isinstance(cache, RedisCache):
        await cache.connect()

    dispatcher = get_email_dispatcher()
    dispatcher.start()

    logger.info(
        "cleanauth API starting up",
        extra={
            "app_env": settings.app_env,
            "store": "memory" if uses_in_memory_store() else "postgres",
            "cache_available": cache.available,
            "email_backend": settings.email_backend,
        },
    )

    try:
        yield
    finally:
        await dispatcher.stop()
        if isinstance(cache, RedisCache):
            await cache.close()
        await close_pool()
        logger.info("cleanauth API shutting down")


async def _db_status() -> str:
    if not is_pool_initialized():
        return "memory"
    try:
        async with get_pool().connection() as conn:
            await conn.execute("SELECT 1")
        return "connected"
    except Exception as exc:
        logger.warning("Health check: DB unavailable", extra={"error": str(exc)})
        return "disconnected"


def create_app() -> FastAPI:
    app = FastAPI(
        title="cleanauth API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Login, refresh token rotation, logout"},
            {"name": "users", "description": "User registration and profile"},
        ],
    )

    # R: el último agregado es el primero en ejecutarse.
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(router)
    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    async def healthz(request: Request):
        """
        Returns:
            ok: True if the store is reachable
            db: "connected" | "disconnected" | "memory"
            cache: "available" | "disabled"
        """
        db_status = await _db_status()
        return {
            "ok": db_status != "disconnected",
            "db": db_status,
            "cache": "available" if get_cache().available else "disabled",
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics", tags=["health"])
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
