# src/jobs/memory_queue.py - v1
"""In-process job queue (QUEUE_BACKEND=memory)."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable

from manuscriptai.jobs.base_queue import DEFAULT_RETRY_DELAYS_S, BaseJobQueue
from manuscriptai.jobs.models import QueueMessage

logger = logging.getLogger(__name__)


class MemoryJobQueue(BaseJobQueue):
    """FIFO queue with delayed redelivery, held in process memory."""

    def __init__(
        self,
        name: str,
        max_retries: int = 3,
        retry_delays_s: tuple[float, ...] | list[float] = DEFAULT_RETRY_DELAYS_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(name, max_retries, retry_delays_s)
        self._clock = clock
        self._ready: list[QueueMessage] = []
        self._delayed: list[tuple[float, QueueMessage]] = []
        self._in_flight: dict[str, QueueMessage] = {}
        self._dead: list[QueueMessage] = []
        self.sent: list[dict[str, Any]] = []

    async def send(self, body: dict[str, Any]) -> str:
        message = QueueMessage(id=str(uuid.uuid4()), body=dict(body))
        self._ready.append(message)
        self.sent.append(dict(body))
        return message.id

    def _promote_due(self) -> None:
        now = self._clock()
        due = [m for ready_at, m in self._delayed if ready_at <= now]
        self._delayed = [(t, m) for t, m in self._delayed if t > now]
        self._ready.extend(due)

    async def receive(self, max_messages: int = 1) -> list[QueueMessage]:
        self._promote_due()
        batch = self._ready[:max_messages]
        self._ready = self._ready[max_messages:]
        for message in batch:
            message.receipt = message.id
            self._in_flight[message.id] = message
        return batch

    async def ack(self, message: QueueMessage) -> None:
        self._in_flight.pop(message.id, None)

    async def retry(self, message: QueueMessage, error: str | None = None) -> bool:
        self._in_flight.pop(message.id, None)
        message.attempts += 1
        message.last_error = error
        if message.attempts > self._max_retries:
            logger.error(
                "Queue %s: message %s dead-lettered after %d attempts",
                self._name, message.id, message.attempts,
            )
            self._dead.append(message)
            return False
        delay = self.retry_delay(message.attempts)
        self._delayed.append((self._clock() + delay, message))
        logger.info(
            "Queue %s: message %s scheduled for retry %d/%d in %.0fs",
            self._name, message.id, message.attempts, self._max_retries, delay,
        )
        return True

    async def dead_letters(self) -> list[QueueMessage]:
        return list(self._dead)

    async def depth(self) -> int:
        return len(self._ready) + len(self._delayed)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)
