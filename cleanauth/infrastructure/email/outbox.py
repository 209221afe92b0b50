"""
Outbox in-process de emails pendientes.

Los casos de uso encolan sin esperar; el EmailDispatcher drena en cada
iteración. Vive en memoria del proceso: lo pendiente se pierde al reiniciar.
"""

from __future__ import annotations

import asyncio

from ...domain.services import EmailMessage


class EmailOutbox:
    def __init__(self) -> None:
        self._queue: asyncio.Queue[EmailMessage] = asyncio.Queue()

    def enqueue(self, message: EmailMessage) -> None:
        self._queue.put_nowait(message)

    def drain(self) -> list[EmailMessage]:
        """Saca todo lo pendiente (no bloquea)."""
        messages: list[EmailMessage] = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return messages

    def __len__(self) -> int:
        return self._queue.qsize()
