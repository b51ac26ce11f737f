# src/storage/base_object_store.py - v1
"""Abstract object store: a flat key -> bytes map with metadata and TTL.

Backends raise StorageError for any I/O failure; a missing key is not an
error and reads as None.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from manuscriptai.core.errors import StorageError

JSON_CONTENT_TYPE = "application/json"


class StoredObject(BaseModel):
    """A stored value with its HTTP and custom metadata."""

    key: str
    body: bytes
    content_type: str = "application/octet-stream"
    metadata: dict[str, str] = Field(default_factory=dict)
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def as_json(self) -> Any:
        try:
            return json.loads(self.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Object {self.key} is not valid JSON: {e}") from e


class BaseObjectStore(ABC):
    """Unified interface for object store backends."""

    @abstractmethod
    async def get(self, key: str) -> StoredObject | None:
        """Read an object, or None if absent or expired."""

    @abstractmethod
    async def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        """Write (or overwrite) an object."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove an object. Missing keys are ignored."""

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def get_text(self, key: str) -> str | None:
        obj = await self.get(key)
        return obj.text() if obj is not None else None

    async def get_json(self, key: str) -> Any | None:
        obj = await self.get(key)
        return obj.as_json() if obj is not None else None

    async def put_json(
        self,
        key: str,
        value: Any,
        *,
        metadata: dict[str, str] | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        await self.put(
            key,
            json.dumps(value, default=str),
            content_type=JSON_CONTENT_TYPE,
            metadata=metadata,
            ttl_seconds=ttl_seconds,
        )


def to_bytes(body: bytes | str) -> bytes:
    return body.encode("utf-8") if isinstance(body, str) else body
