# src/jobs/base_queue.py - v1
"""Abstract job queue with at-least-once delivery.

A received message stays in flight until it is acked or handed back with
``retry``. A message retried more than ``max_retries`` times is moved to the
dead-letter list instead of being redelivered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from manuscriptai.jobs.models import QueueMessage

DEFAULT_RETRY_DELAYS_S = (5.0, 30.0, 300.0)


class BaseJobQueue(ABC):
    """Unified interface for queue backends."""

    def __init__(
        self,
        name: str,
        max_retries: int = 3,
        retry_delays_s: tuple[float, ...] | list[float] = DEFAULT_RETRY_DELAYS_S,
    ) -> None:
        self._name = name
        self._max_retries = max_retries
        self._retry_delays_s = tuple(retry_delays_s) or (0.0,)

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def retry_delay(self, attempts: int) -> float:
        """Delay before redelivery after the ``attempts``-th failure (1-based)."""
        index = min(max(attempts, 1), len(self._retry_delays_s)) - 1
        return self._retry_delays_s[index]

    @abstractmethod
    async def send(self, body: dict[str, Any]) -> str:
        """Publish a job. Returns the message id."""

    @abstractmethod
    async def receive(self, max_messages: int = 1) -> list[QueueMessage]:
        """Take up to ``max_messages`` ready messages (may be empty)."""

    @abstractmethod
    async def ack(self, message: QueueMessage) -> None:
        """Mark a delivery as done."""

    @abstractmethod
    async def retry(self, message: QueueMessage, error: str | None = None) -> bool:
        """Hand a delivery back. Returns False if it was dead-lettered."""

    @abstractmethod
    async def dead_letters(self) -> list[QueueMessage]:
        """Messages that used up their retries."""

    @abstractmethod
    async def depth(self) -> int:
        """Messages waiting for delivery (ready or delayed)."""
