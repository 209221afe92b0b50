"""
============================================================
TARJETA CRC — infrastructure/email/services.py
============================================================
Componente:
  Servicios de envío de email

Responsabilidades:
  - LoggingEmailService: "envía" logueando destinatario y asunto (dev/tests).
  - SmtpEmailService: envío real vía smtplib en un thread (no bloquea el loop).
  - build_email_service(): elige la implementación una sola vez.

Colaboradores:
  - domain/services.py (EmailService, EmailMessage)
  - worker/email_dispatcher.py
  - crosscutting/config.py (email_backend / smtp_*)
============================================================
"""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from collections import deque
from email.mime.text import MIMEText

from ...crosscutting.config import Settings
from ...crosscutting.exceptions import EmailDeliveryError
from ...crosscutting.logger import logger
from ...domain.services import EmailMessage

SMTP_TIMEOUT_SECONDS = 30
RECENT_EMAILS_LIMIT = 100


def _redact_email(email: str) -> str:
    """Evita PII completa en logs."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class LoggingEmailService:
    """
    Mock: no envía nada, deja constancia en logs.

    `sent` guarda solo los últimos `limit` mensajes (proceso de larga vida).
    """

    def __init__(self, limit: int = RECENT_EMAILS_LIMIT) -> None:
        self.sent: deque[EmailMessage] = deque(maxlen=limit)

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)
        logger.info(
            "Email (modo log)",
            extra={"to": _redact_email(message.to), "subject": message.subject},
        )


class SmtpEmailService:
    def __init__(
        self,
        *,
        host: str,
        port: int = 587,
        user: str = "",
        password: str = "",
        sender: str = "no-reply@localhost",
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._sender = sender

    def _send_sync(self, message: EmailMessage) -> None:
        msg = MIMEText(message.body, "plain", "utf-8")
        msg["Subject"] = message.subject
        msg["From"] = self._sender
        msg["To"] = message.to

        context = ssl.create_default_context()
        with smtplib.SMTP(
            self._host, self._port, timeout=SMTP_TIMEOUT_SECONDS
        ) as server:
            server.starttls(context=context)
            if self._user and self._password:
                server.login(self._user, self._password)
            server.sendmail(self._sender, [message.to], msg.as_string())

    async def send(self, message: EmailMessage) -> None:
        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(
                "SMTP delivery failed", original_error=exc
            ) from exc
        logger.info(
            "Email enviado",
            extra={"to": _redact_email(message.to), "subject": message.subject},
        )


def build_email_service(settings: Settings):
    if settings.email_backend == "smtp":
        return SmtpEmailService(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            sender=settings.smtp_sender,
        )
    return LoggingEmailService()
