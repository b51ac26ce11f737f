# src/jobs/redis_queue.py - v1
"""Redis-backed job queue (QUEUE_BACKEND=redis).

Requires 'redis' package: pip install redis.

Keys per queue name:
    queue:<name>:pending     list, ready messages (LPUSH in, RPOPLPUSH out)
    queue:<name>:processing  list, messages in flight
    queue:<name>:delayed     sorted set, score = epoch seconds when ready
    queue:<name>:dead        list, dead-lettered messages
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable

from manuscriptai.core.errors import StorageError
from manuscriptai.jobs.base_queue import DEFAULT_RETRY_DELAYS_S, BaseJobQueue
from manuscriptai.jobs.models import QueueMessage

logger = logging.getLogger(__name__)


class RedisJobQueue(BaseJobQueue):
    """Reliable-queue pattern on Redis lists."""

    def __init__(
        self,
        name: str,
        redis_url: str,
        max_retries: int = 3,
        retry_delays_s: tuple[float, ...] | list[float] = DEFAULT_RETRY_DELAYS_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(name, max_retries, retry_delays_s)
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._clock = clock

    def _key(self, part: str) -> str:
        return f"queue:{self._name}:{part}"

    def _call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        from redis.exceptions import RedisError

        try:
            return fn(*args, **kwargs)
        except RedisError as e:
            raise StorageError(f"Queue {self._name}: redis error: {e}") from e

    async def send(self, body: dict[str, Any]) -> str:
        message = QueueMessage(id=str(uuid.uuid4()), body=dict(body))
        self._call(self._client.lpush, self._key("pending"), message.model_dump_json())
        logger.debug("Queue %s: sent %s", self._name, message.id)
        return message.id

    def _promote_due(self) -> None:
        due = self._call(
            self._client.zrangebyscore, self._key("delayed"), 0, self._clock()
        )
        for raw in due:
            # Only the caller that removes the member re-queues it.
            if self._call(self._client.zrem, self._key("delayed"), raw):
                self._call(self._client.lpush, self._key("pending"), raw)

    async def receive(self, max_messages: int = 1) -> list[QueueMessage]:
        self._promote_due()
        batch: list[QueueMessage] = []
        for _ in range(max_messages):
            raw = self._call(
                self._client.rpoplpush, self._key("pending"), self._key("processing")
            )
            if raw is None:
                break
            message = QueueMessage.model_validate_json(raw)
            message.receipt = raw
            batch.append(message)
        return batch

    async def ack(self, message: QueueMessage) -> None:
        self._call(self._client.lrem, self._key("processing"), 1, message.receipt)

    async def retry(self, message: QueueMessage, error: str | None = None) -> bool:
        self._call(self._client.lrem, self._key("processing"), 1, message.receipt)
        message.attempts += 1
        message.last_error = error
        raw = message.model_dump_json()

        if message.attempts > self._max_retries:
            self._call(self._client.lpush, self._key("dead"), raw)
            logger.error(
                "Queue %s: message %s dead-lettered after %d attempts",
                self._name, message.id, message.attempts,
            )
            return False

        delay = self.retry_delay(message.attempts)
        self._call(
            self._client.zadd, self._key("delayed"), {raw: self._clock() + delay}
        )
        logger.info(
            "Queue %s: message %s scheduled for retry %d/%d in %.0fs",
            self._name, message.id, message.attempts, self._max_retries, delay,
        )
        return True

    async def dead_letters(self) -> list[QueueMessage]:
        raws = self._call(self._client.lrange, self._key("dead"), 0, -1)
        return [QueueMessage.model_validate_json(raw) for raw in raws]

    async def depth(self) -> int:
        pending = self._call(self._client.llen, self._key("pending"))
        delayed = self._call(self._client.zcard, self._key("delayed"))
        return int(pending) + int(delayed)

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
