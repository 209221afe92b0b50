"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO emails, NO tokens).
    - Exponer helpers para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: registra latencia y conteo HTTP.
    - application/usecases: login/refresh outcomes y cache hit/miss.
    - worker/email_dispatcher: emails enviados/fallidos.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "cleanauth_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "cleanauth_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# ------------------------
# Cache de usuarios
# ------------------------
_user_cache_hits = Counter(
    "cleanauth_user_cache_hit_total",
    "Hits del cache de read models de usuario",
    registry=_registry,
)

_user_cache_misses = Counter(
    "cleanauth_user_cache_miss_total",
    "Misses del cache de read models de usuario",
    registry=_registry,
)

# ------------------------
# Auth
# ------------------------
_login_total = Counter(
    "cleanauth_auth_login_total",
    "Intentos de login por resultado",
    ["outcome"],
    registry=_registry,
)

_refresh_total = Counter(
    "cleanauth_auth_refresh_total",
    "Intentos de refresh por resultado",
    ["outcome"],
    registry=_registry,
)

# ------------------------
# Email dispatcher
# ------------------------
_emails_sent_total = Counter(
    "cleanauth_emails_sent_total",
    "Emails entregados al proveedor",
    registry=_registry,
)

_emails_failed_total = Counter(
    "cleanauth_emails_failed_total",
    "Emails que fallaron al enviarse",
    registry=_registry,
)


# -----------------------------------------------------------------------------
# API pública (helpers de registro)
# -----------------------------------------------------------------------------


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP.

    - endpoint se normaliza para no explotar cardinalidad.
    - status se agrupa por 2xx/4xx/5xx.
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_user_cache_hit() -> None:
    _user_cache_hits.inc()


def record_user_cache_miss() -> None:
    _user_cache_misses.inc()


def record_login(outcome: str) -> None:
    """outcome: success | invalid_credentials | inactive"""
    _login_total.labels(outcome=outcome).inc()


def record_refresh(outcome: str) -> None:
    """outcome: success | rejected | invalid_input"""
    _refresh_total.labels(outcome=outcome).inc()


def record_email_sent(count: int = 1) -> None:
    _emails_sent_total.inc(count)


def record_email_failed(count: int = 1) -> None:
    _emails_failed_total.inc(count)


# -----------------------------------------------------------------------------
# Helpers internos
# -----------------------------------------------------------------------------


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta.

    Reemplaza UUIDs e IDs numéricos por `{id}`.
    """
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


# -----------------------------------------------------------------------------
# Exposición del endpoint /metrics
# -----------------------------------------------------------------------------


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
