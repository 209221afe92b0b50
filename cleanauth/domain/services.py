"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios (hashing de passwords, email)

Responsabilidades:
    - Contratos de servicios externos consumidos por los casos de uso.

Colaboradores:
    - identity/passwords.py: Argon2PasswordHasher
    - infrastructure/email/*: LoggingEmailService / SmtpEmailService / EmailOutbox
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str:
        """Digest autodescriptivo (algoritmo + costo + salt)."""
        ...

    def verify(self, plaintext: str, digest: str) -> bool:
        """False ante cualquier problema; nunca lanza."""
        ...

    def dummy_verify(self, plaintext: str) -> None:
        """Verificación contra un digest señuelo (iguala tiempos)."""
        ...


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str


class EmailService(Protocol):
    async def send(self, message: EmailMessage) -> None:
        ...


class EmailQueue(Protocol):
    """Outbox de emails pendientes (consumido por el dispatcher)."""

    def enqueue(self, message: EmailMessage) -> None:
        ...

    def drain(self) -> list[EmailMessage]:
        ...
