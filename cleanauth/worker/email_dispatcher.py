"""
===============================================================================
TARJETA CRC — worker/email_dispatcher.py (Despacho periódico de emails)
===============================================================================

Responsabilidades:
  - Cada `interval_seconds`, drenar el outbox y enviar cada email pendiente.
  - Aislar fallas: un email que falla se loguea y no corta el loop.
  - Terminar limpio ante cancelación (shutdown del proceso).

Patrones aplicados:
  - Background task atada al lifespan de FastAPI (start/stop).
  - Ambient context: un job_id por iteración para correlacionar logs.

Colaboradores:
  - infrastructure.email.outbox.EmailOutbox
  - domain.services.EmailService (Logging / SMTP)
  - crosscutting.metrics (emails enviados/fallidos)
===============================================================================
"""

from __future__ import annotations

import asyncio
import contextlib
import uuid

from ..context import clear_context, set_job_context
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_email_failed, record_email_sent
from ..domain.services import EmailQueue, EmailService

DEFAULT_INTERVAL_SECONDS = 5.0


class EmailDispatcher:
    def __init__(
        self,
        outbox: EmailQueue,
        service: EmailService,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._outbox = outbox
        self._service = service
        self._interval = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Una iteración: drena y envía. Devuelve cuántos se enviaron."""
        sent = 0
        for message in self._outbox.drain():
            try:
                await self._service.send(message)
            except Exception:
                # R: un email fallido no frena al resto del batch.
                logger.exception(
                    "Fallo enviando email", extra={"subject": message.subject}
                )
                record_email_failed()
                continue
            sent += 1
            record_email_sent()
        return sent

    async def run(self) -> None:
        """Loop principal; sale solo por cancelación."""
        logger.info("Email dispatcher iniciado", extra={"interval_s": self._interval})
        try:
            while True:
                set_job_context(str(uuid.uuid4()))
                try:
                    sent = await self.run_once()
                    if sent:
                        logger.info("Emails despachados", extra={"count": sent})
                except Exception:
                    logger.exception("Iteración del email dispatcher falló")
                finally:
                    clear_context()
                await asyncio.sleep(self._interval)
        except asyncio.CancelledError:
            logger.info("Email dispatcher detenido")
            raise

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self.run(), name="email-dispatcher")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
