# src/storage/memory_store.py - v1
"""In-process object store (OBJECT_STORE_BACKEND=memory).

Used by tests and single-process runs. TTLs are honoured on read.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from manuscriptai.storage.base_object_store import (
    BaseObjectStore,
    StoredObject,
    to_bytes,
)


class MemoryObjectStore(BaseObjectStore):
    """Dict-backed object store."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._objects: dict[str, StoredObject] = {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def get(self, key: str) -> StoredObject | None:
        obj = self._objects.get(key)
        if obj is None:
            return None
        if obj.is_expired(self._clock()):
            del self._objects[key]
            return None
        return obj

    async def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        expires_at = None
        if ttl_seconds is not None:
            expires_at = self._clock() + timedelta(seconds=ttl_seconds)
        self._objects[key] = StoredObject(
            key=key,
            body=to_bytes(body),
            content_type=content_type,
            metadata=dict(metadata or {}),
            expires_at=expires_at,
        )

    async def delete(self, key: str) -> None:
        self._objects.pop(key, None)

    def keys(self) -> list[str]:
        """Live keys, sorted."""
        now = self._clock()
        return sorted(k for k, v in self._objects.items() if not v.is_expired(now))
