# src/jobs/queue_factory.py - v1
"""Factory: instantiate the analysis and asset queues from configuration."""

from __future__ import annotations

from manuscriptai.config.settings import Settings
from manuscriptai.jobs.base_queue import BaseJobQueue


def create_queue(settings: Settings, name: str) -> BaseJobQueue:
    """Create one named queue on the configured backend."""
    if settings.queue_backend == "redis":
        from manuscriptai.jobs.redis_queue import RedisJobQueue

        return RedisJobQueue(
            name,
            settings.queue_redis_url,
            max_retries=settings.queue_max_retries,
            retry_delays_s=settings.queue_retry_delays_s,
        )

    from manuscriptai.jobs.memory_queue import MemoryJobQueue

    return MemoryJobQueue(
        name,
        max_retries=settings.queue_max_retries,
        retry_delays_s=settings.queue_retry_delays_s,
    )
