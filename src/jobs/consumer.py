# src/jobs/consumer.py - v1
"""Queue consumer loop: pull a batch, process concurrently, ack or retry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from manuscriptai.jobs.base_queue import BaseJobQueue
from manuscriptai.jobs.models import QueueMessage
from manuscriptai.logging.context import clear_context, set_job_context

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[Any]]


@dataclass
class BatchResult:
    """Outcome of one batch."""

    acked: list[str] = field(default_factory=list)
    retried: list[str] = field(default_factory=list)
    dead_lettered: list[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.acked) + len(self.retried) + len(self.dead_lettered)


class QueueConsumer:
    """Drives one handler off one queue.

    Each message of a batch runs in its own task, so jobs share no context
    and one failure does not affect its neighbours.
    """

    def __init__(
        self,
        queue: BaseJobQueue,
        handler: Handler,
        *,
        batch_size: int = 5,
        idle_sleep_s: float = 1.0,
    ) -> None:
        self._queue = queue
        self._handler = handler
        self._batch_size = batch_size
        self._idle_sleep_s = idle_sleep_s

    async def process_batch(self) -> BatchResult:
        messages = await self._queue.receive(self._batch_size)
        result = BatchResult()
        if not messages:
            return result
        outcomes = await asyncio.gather(*(self._process(m) for m in messages))
        for message, outcome in zip(messages, outcomes):
            getattr(result, outcome).append(message.id)
        logger.info(
            "Queue %s batch: %d acked, %d retried, %d dead-lettered",
            self._queue.name, len(result.acked), len(result.retried),
            len(result.dead_lettered),
        )
        return result

    async def _process(self, message: QueueMessage) -> str:
        set_job_context(
            message.body.get("reportId"),
            message.body.get("manuscriptKey"),
            self._queue.name,
        )
        try:
            await self._handler(message.body)
        except Exception as e:
            logger.exception(
                "Queue %s: message %s failed (attempt %d)",
                self._queue.name, message.id, message.attempts + 1,
            )
            requeued = await self._queue.retry(message, error=str(e))
            return "retried" if requeued else "dead_lettered"
        else:
            await self._queue.ack(message)
            return "acked"
        finally:
            clear_context()

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Poll until ``stop_event`` is set."""
        stop_event = stop_event or asyncio.Event()
        logger.info("Consuming queue %s (batch size %d)", self._queue.name, self._batch_size)
        while not stop_event.is_set():
            result = await self.process_batch()
            if result.size == 0:
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=self._idle_sleep_s)
                except asyncio.TimeoutError:
                    pass
        logger.info("Stopped consuming queue %s", self._queue.name)
