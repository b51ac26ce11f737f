# src/storage/redis_store.py - v1
"""Redis-based object store (OBJECT_STORE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Each object is a hash (body, content type, metadata) with a native key TTL,
which suits the short-lived progress and report-id records.
"""

from __future__ import annotations

import json
import logging

from manuscriptai.core.errors import StorageError
from manuscriptai.storage.base_object_store import (
    BaseObjectStore,
    StoredObject,
    to_bytes,
)

logger = logging.getLogger(__name__)

_KEY_PREFIX = "manuscriptai:obj:"


class RedisObjectStore(BaseObjectStore):
    """Redis-backed object store for multi-worker deployments."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        # Bodies are raw bytes, so responses are not decoded.
        self._client = redis.Redis.from_url(redis_url, decode_responses=False)

    async def get(self, key: str) -> StoredObject | None:
        from redis.exceptions import RedisError

        try:
            data = self._client.hgetall(f"{_KEY_PREFIX}{key}")
        except RedisError as e:
            raise StorageError(f"Redis read failed for {key}: {e}") from e
        if not data:
            return None
        return StoredObject(
            key=key,
            body=data.get(b"body", b""),
            content_type=data.get(b"content_type", b"application/octet-stream").decode(),
            metadata=json.loads(data.get(b"metadata", b"{}")),
        )

    async def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        from redis.exceptions import RedisError

        redis_key = f"{_KEY_PREFIX}{key}"
        mapping = {
            "body": to_bytes(body),
            "content_type": content_type,
            "metadata": json.dumps(metadata or {}),
        }
        try:
            pipe = self._client.pipeline()
            pipe.delete(redis_key)
            pipe.hset(redis_key, mapping=mapping)
            if ttl_seconds is not None:
                pipe.expire(redis_key, ttl_seconds)
            pipe.execute()
        except RedisError as e:
            raise StorageError(f"Redis write failed for {key}: {e}") from e

    async def delete(self, key: str) -> None:
        from redis.exceptions import RedisError

        try:
            self._client.delete(f"{_KEY_PREFIX}{key}")
        except RedisError as e:
            raise StorageError(f"Redis delete failed for {key}: {e}") from e

    async def exists(self, key: str) -> bool:
        from redis.exceptions import RedisError

        try:
            return bool(self._client.exists(f"{_KEY_PREFIX}{key}"))
        except RedisError as e:
            raise StorageError(f"Redis exists failed for {key}: {e}") from e

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
